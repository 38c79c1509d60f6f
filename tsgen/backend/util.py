"""Shared utilities for lowering and emission: renaming, escaping, line output."""

from __future__ import annotations

import re
import string

from ..ir import RenameRule

# Case folding is ASCII-only; non-ASCII letters pass through unchanged.
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def ascii_upper(s: str) -> str:
    """Uppercase ASCII letters only."""
    return s.translate(_TO_UPPER)


def ascii_lower(s: str) -> str:
    """Lowercase ASCII letters only."""
    return s.translate(_TO_LOWER)


def _snake_to_joined(name: str, capitalize_first: bool) -> str:
    """Drop underscores, uppercasing the character that follows each one."""
    result: list[str] = []
    capitalize = capitalize_first
    for ch in name:
        if ch == "_":
            capitalize = True
        elif capitalize:
            result.append(ascii_upper(ch))
            capitalize = False
        else:
            result.append(ch)
    return "".join(result)


def _pascal_to_separated(name: str, separator: str) -> str:
    """Insert separator before every uppercase letter after the first, then lowercase."""
    result: list[str] = []
    for i, ch in enumerate(name):
        if i > 0 and ch.isupper():
            result.append(separator)
        result.append(ascii_lower(ch))
    return "".join(result)


def rename_field(rule: RenameRule | None, name: str) -> str:
    """Rename a field identifier, which is snake_case in the IR."""
    match rule:
        case None:
            return name
        case "lowercase":
            return ascii_lower(name)
        case "UPPERCASE":
            return ascii_upper(name)
        case "PascalCase":
            return _snake_to_joined(name, True)
        case "camelCase":
            return _snake_to_joined(name, False)
        case "snake_case":
            return name
        case "SCREAMING_SNAKE_CASE":
            return ascii_upper(name)
        case "kebab-case":
            return name.replace("_", "-")
        case "SCREAMING-KEBAB-CASE":
            return ascii_upper(name).replace("_", "-")
        case _:
            raise ValueError("unknown rename rule: " + repr(rule))


def rename_type(rule: RenameRule | None, name: str) -> str:
    """Rename a type or variant identifier, which is PascalCase in the IR."""
    match rule:
        case None:
            return name
        case "lowercase":
            return ascii_lower(name)
        case "UPPERCASE":
            return ascii_upper(name)
        case "PascalCase":
            return name
        case "camelCase":
            return ascii_lower(name[:1]) + name[1:]
        case "snake_case":
            return _pascal_to_separated(name, "_")
        case "SCREAMING_SNAKE_CASE":
            return ascii_upper(_pascal_to_separated(name, "_"))
        case "kebab-case":
            return _pascal_to_separated(name, "-")
        case "SCREAMING-KEBAB-CASE":
            return ascii_upper(_pascal_to_separated(name, "-"))
        case _:
            raise ValueError("unknown rename rule: " + repr(rule))


def is_identifier(name: str) -> bool:
    """True if name can be written as a bare property name."""
    return _IDENTIFIER.fullmatch(name) is not None


def escape_string(value: str) -> str:
    """Escape a string for use in a double-quoted literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\f", "\\f")
        .replace("\v", "\\v")
        .replace("\x00", "\\x00")
    )


class Emitter:
    """Line accumulator with indentation tracking."""

    def __init__(self, indent_str: str = "\t") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation."""
        if text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")

    def output(self) -> str:
        """Return the accumulated output, newline-terminated."""
        return "\n".join(self.lines) + "\n"
