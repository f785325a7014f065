"""Indentation for newly opened lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .syntax import SyntaxState

_BRACKET_BALANCE = {"{": 1, "(": 1, "[": 1, "}": -1, ")": -1, "]": -1}


def _line(text: str, index: int) -> str | None:
    lines = text.split("\n")
    return lines[index] if index < len(lines) else None


def copy_indent(text: str, reference_line: int) -> int:
    """Return the number of leading whitespace characters on a line."""
    line = _line(text, reference_line)
    if line is None:
        return 0
    return len(line) - len(line.lstrip())


def bracket_indent(text: str, reference_line: int, tab_size: int) -> int:
    """Indent for a line after ``reference_line``, judged by its brackets and colons."""
    base = copy_indent(text, reference_line)
    trimmed = (_line(text, reference_line) or "").strip()
    balance = sum(_BRACKET_BALANCE.get(ch, 0) for ch in trimmed)

    if balance > 0:
        return base + tab_size
    if trimmed.endswith(":") and not trimmed.endswith("::"):
        return base + tab_size
    if trimmed.startswith(("}", ")", "]")):
        return max(base - tab_size, 0)
    return base


def compute_indent(
    text: str,
    syntax_state: SyntaxState | None,
    reference_line: int,
    tab_size: int,
) -> int:
    """Indent for a new line after ``reference_line``.

    Uses the bracket analysis when the syntax state holds a parsed token
    stream, and copies the reference line's indent otherwise.
    """
    if syntax_state is not None and syntax_state.tree is not None:
        return bracket_indent(text, reference_line, tab_size)
    return copy_indent(text, reference_line)