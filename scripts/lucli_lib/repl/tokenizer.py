"""
Line tokenizer for the LuCLI shell.

Splits a raw command line into argv-style tokens. Single and double quotes
group words; a quote preceded by a backslash is kept literally. Nothing is
un-escaped, and an unterminated quote simply runs to the end of the line.
"""

QUOTE_CHARS = ('"', "'")


def tokenize(line: str) -> list[str]:
    """Split a line into tokens honoring quotes. Never raises."""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    quote_char = '"'

    for i, c in enumerate(line or ""):
        escaped = i > 0 and line[i - 1] == '\\'
        if c in QUOTE_CHARS and not escaped:
            if not in_quotes:
                in_quotes = True
                quote_char = c
            elif c == quote_char:
                in_quotes = False
            else:
                # The other quote character inside a quoted run
                current.append(c)
        elif c.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(c)

    if current:
        tokens.append("".join(current))

    return tokens
