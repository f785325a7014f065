"""Per-line highlight spans in character columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .syntax import SyntaxState


def _char_count(data: bytes) -> int:
    """Number of characters that start within ``data``."""
    return len(data.decode("utf-8", errors="ignore"))


def highlights_for_line(
    syntax_state: SyntaxState, text: str, line_idx: int
) -> list[tuple[int, int, str]]:
    """Return ``(col_start, col_end, capture_name)`` spans for one line.

    Columns are character offsets within the line; spans that cross line
    boundaries are clipped to the line, including its trailing newline.
    """
    lines = text.split("\n")
    if line_idx >= len(lines):
        return []

    line_start_byte = sum(len(line.encode("utf-8")) + 1 for line in lines[:line_idx])
    is_last = line_idx + 1 >= len(lines)
    line_bytes = (lines[line_idx] + ("" if is_last else "\n")).encode("utf-8")
    line_end_byte = line_start_byte + len(line_bytes)

    spans: list[tuple[int, int, str]] = []
    for start, end, name in syntax_state.highlights:
        if end <= line_start_byte or start >= line_end_byte:
            continue
        clamped_start = max(start, line_start_byte) - line_start_byte
        clamped_end = min(end, line_end_byte) - line_start_byte
        spans.append(
            (
                _char_count(line_bytes[:clamped_start]),
                _char_count(line_bytes[:clamped_end]),
                name,
            )
        )
    return spans