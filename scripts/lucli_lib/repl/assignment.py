"""
Assignment classifier for LuCLI script lines.

Recognizes `[set] NAME = VALUE` and classifies the value:

    X=$(ls -la)            command substitution (value is the inner command)
    Y=${secret:db_pass}    secret reference
    Z=${HOME}              environment reference
    greeting="hello"       literal (anything else)

Classification is total and pure: every line yields exactly one Assignment.
"""

import re
from dataclasses import dataclass
from enum import Enum


ASSIGNMENT_PATTERN = re.compile(r"(?:set\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.+?)\s*", re.IGNORECASE)
COMMAND_PATTERN = re.compile(r"\$\((.*)\)", re.DOTALL)
SECRET_PATTERN = re.compile(r"\$\{secret:([^}]+)\}")
ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class AssignmentKind(Enum):
    NONE = "none"
    LITERAL = "literal"
    COMMAND_SUBSTITUTION = "command_substitution"
    ENVIRONMENT_REF = "environment_ref"
    SECRET_REF = "secret_ref"


@dataclass(frozen=True)
class Assignment:
    """Result of classifying one line."""
    kind: AssignmentKind = AssignmentKind.NONE
    variable_name: str = ""
    variable_value: str = ""

    @property
    def is_assignment(self) -> bool:
        return self.kind is not AssignmentKind.NONE

    @property
    def secret_id(self) -> str:
        """The ID inside ${secret:ID}, or "" for other kinds."""
        if self.kind is not AssignmentKind.SECRET_REF:
            return ""
        return SECRET_PATTERN.fullmatch(self.variable_value).group(1)

    @property
    def env_name(self) -> str:
        """The NAME inside ${NAME}, or "" for other kinds."""
        if self.kind is not AssignmentKind.ENVIRONMENT_REF:
            return ""
        return ENV_PATTERN.fullmatch(self.variable_value).group(1)


NOT_AN_ASSIGNMENT = Assignment()


def classify(line: str) -> Assignment:
    """Classify a single line as an assignment (or not)."""
    match = ASSIGNMENT_PATTERN.fullmatch((line or "").strip())
    if not match:
        return NOT_AN_ASSIGNMENT

    name = match.group(1)
    value = match.group(2).strip()

    # Substitution is checked first and is exclusive: ${secret:...} inside
    # $(...) is left for whatever runs the substituted command.
    command = COMMAND_PATTERN.fullmatch(value)
    if command:
        return Assignment(AssignmentKind.COMMAND_SUBSTITUTION, name, command.group(1))
    if SECRET_PATTERN.fullmatch(value):
        return Assignment(AssignmentKind.SECRET_REF, name, value)
    if ENV_PATTERN.fullmatch(value):
        return Assignment(AssignmentKind.ENVIRONMENT_REF, name, value)
    return Assignment(AssignmentKind.LITERAL, name, value)
