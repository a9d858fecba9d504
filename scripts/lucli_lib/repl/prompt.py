"""
Prompt templates for the LuCLI REPL.

Templates are Jinja2 strings rendered with `path`, `time` and `git`.
Built-in templates ship here; users may add <LUCLI_HOME>/prompts/<name>.json
documents with `name`, `description` and `template` keys.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment

from lucli_lib.common import warn
from .context import FileSystemState


@dataclass
class PromptTemplate:
    name: str
    description: str
    template: str


BUILTIN_TEMPLATES = {
    "default": PromptTemplate("default", "Default LuCLI prompt", "🔧 lucli:{{ path }}$ "),
    "minimal": PromptTemplate("minimal", "Just a marker", "❯ "),
    "time": PromptTemplate("time", "Clock and path", "[{{ time }}] {{ path }}$ "),
    "git": PromptTemplate("git", "Path with git branch", "{{ git }}{{ path }}$ "),
}

EMOJI_PATTERN = re.compile(
    "[\U0001F300-\U0001FAFF\u2190-\u21FF\u2300-\u23FF\u2600-\u27BF\u2B00-\u2BFF\uFE0F]"
)


def git_info(directory: Path) -> str:
    """Return '[branch] ' for a git work tree, '[git] ' if detached, else ''."""
    for candidate in (directory, *directory.parents):
        git_dir = candidate / ".git"
        if git_dir.exists():
            head_file = git_dir / "HEAD"
            try:
                head = head_file.read_text().strip()
            except OSError:
                return "[git] "
            if head.startswith("ref: refs/heads/"):
                return f"[{head[len('ref: refs/heads/'):]}] "
            return "[git] "
    return ""


def strip_emojis(text: str) -> str:
    stripped = EMOJI_PATTERN.sub("", text)
    return re.sub(r"\s+", " ", stripped).strip() + " "


class PromptConfig:
    """Resolves the current template and renders the prompt."""

    def __init__(self, settings):
        self.settings = settings
        self.env = Environment(autoescape=False, keep_trailing_newline=False)

    def _user_template(self, name: str) -> Optional[PromptTemplate]:
        path = self.settings.prompts_dir / f"{name}.json"
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("prompt template must be a JSON object")
            template = data.get("template", "$ ")
            if not isinstance(template, str):
                raise ValueError("template must be a string")
            return PromptTemplate(
                name=data.get("name", name),
                description=data.get("description", "Custom prompt"),
                template=template,
            )
        except (OSError, ValueError) as e:
            warn(f"Could not load prompt template {name}: {e}")
            return None

    def get_template(self, name: str) -> Optional[PromptTemplate]:
        if name in BUILTIN_TEMPLATES:
            return BUILTIN_TEMPLATES[name]
        return self._user_template(name)

    def current_template(self) -> PromptTemplate:
        return self.get_template(self.settings.current_prompt) or BUILTIN_TEMPLATES["default"]

    def available(self) -> list[str]:
        names = set(BUILTIN_TEMPLATES)
        if self.settings.prompts_dir.exists():
            names.update(p.stem for p in self.settings.prompts_dir.glob("*.json"))
        return sorted(names)

    def set_current(self, name: str) -> bool:
        if self.get_template(name) is None:
            return False
        self.settings.current_prompt = name
        return True

    def render(self, fs: FileSystemState, template: Optional[PromptTemplate] = None) -> str:
        template = template or self.current_template()
        values = {
            "path": fs.display_path() if self.settings.get_bool("prompt.showPath", True) else "",
            "time": datetime.now().strftime("%H:%M:%S"),
            "git": "",
        }
        if "git" in template.template:
            values["git"] = git_info(fs.cwd)

        try:
            prompt = self.env.from_string(template.template).render(**values)
        except Exception as e:
            # Syntax errors and failures raised while rendering alike
            warn(f"Invalid prompt template '{template.name}': {e}")
            prompt = f"lucli:{values['path']}$ "

        if not self.settings.show_emojis:
            prompt = strip_emojis(prompt)
        return prompt
