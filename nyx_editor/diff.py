"""Side-by-side view of a file's git diff."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DiffMode(Enum):
    """Which changes to show."""

    WORKING_TREE = "working_tree"
    STAGED = "staged"

    @property
    def label(self) -> str:
        return "Working Tree Diff" if self is DiffMode.WORKING_TREE else "Staged Diff"


class LineKind(Enum):
    """Kind of a row in the side-by-side diff."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    HUNK_HEADER = "hunk_header"


@dataclass
class SideBySideLine:
    """One row: optional ``(line_number, text)`` for each side."""

    left: tuple[int, str] | None
    right: tuple[int, str] | None
    kind: LineKind


def _split_lines(output: str) -> list[str]:
    if not output:
        return []
    lines = output.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_number(text: str) -> int | None:
    text = text.removeprefix("+")
    if text and text.isascii() and text.isdigit():
        return int(text)
    return None


def parse_hunk_header(line: str) -> tuple[int, int] | None:
    """Return the left and right start lines of ``@@ -L,S +R,S @@``, or None."""
    if not line.startswith("@@ "):
        return None
    rest = line[3:]
    end = rest.find(" @@")
    if end == -1:
        return None
    parts = rest[:end].split()
    if len(parts) < 2 or not parts[0].startswith("-") or not parts[1].startswith("+"):
        return None
    left = _parse_number(parts[0][1:].split(",")[0])
    right = _parse_number(parts[1][1:].split(",")[0])
    if left is None or right is None:
        return None
    return left, right


def parse_unified_diff(output: str) -> list[SideBySideLine]:
    """Turn unified diff text into aligned side-by-side rows."""
    rows: list[SideBySideLine] = []
    left_num = right_num = 0
    in_hunk = False

    for raw in _split_lines(output):
        if raw.startswith("@@"):
            header = parse_hunk_header(raw)
            if header is not None:
                left_num, right_num = header
            rows.append(SideBySideLine((0, raw), None, LineKind.HUNK_HEADER))
            in_hunk = True
            continue
        if not in_hunk:
            continue

        if raw.startswith("+"):
            rows.append(SideBySideLine(None, (right_num, raw[1:]), LineKind.ADDED))
            right_num += 1
        elif raw.startswith("-"):
            rows.append(SideBySideLine((left_num, raw[1:]), None, LineKind.REMOVED))
            left_num += 1
        elif raw == "\\ No newline at end of file":
            continue
        else:
            text = raw[1:] if raw.startswith(" ") else raw
            rows.append(
                SideBySideLine((left_num, text), (right_num, text), LineKind.CONTEXT)
            )
            left_num += 1
            right_num += 1
    return rows


class DiffView:
    """Diff of one file in a repository, with a scroll position."""

    def __init__(self, root: str | Path, path: str, mode: DiffMode) -> None:
        self.root = Path(root)
        self.path = path
        self.mode = mode
        self.lines: list[SideBySideLine] = []
        self.scroll_offset = 0
        self.first_change = 0
        self.reload()

    @property
    def title(self) -> str:
        return f"{self.path} — {self.mode.label}"

    def _run_diff(self) -> str:
        args = ["git", "diff"]
        if self.mode is DiffMode.STAGED:
            args.append("--cached")
        args += ["--", self.path]
        try:
            result = subprocess.run(args, cwd=self.root, capture_output=True)
        except OSError as exc:
            return f"Failed to run git diff: {exc}"
        data = result.stdout if result.returncode == 0 else result.stderr
        return data.decode("utf-8", errors="replace")

    def reload(self) -> None:
        """Re-run git diff and scroll to just above the first change."""
        self.lines = parse_unified_diff(self._run_diff())
        self.first_change = next(
            (
                i
                for i, row in enumerate(self.lines)
                if row.kind not in (LineKind.CONTEXT, LineKind.HUNK_HEADER)
            ),
            0,
        )
        self.scroll_offset = max(self.first_change - 3, 0)

    def toggle_mode(self) -> None:
        """Switch between working-tree and staged diffs and reload."""
        self.mode = (
            DiffMode.STAGED if self.mode is DiffMode.WORKING_TREE else DiffMode.WORKING_TREE
        )
        self.reload()

    def scroll_down(self) -> None:
        if self.scroll_offset < max(len(self.lines) - 1, 0):
            self.scroll_offset += 1

    def scroll_up(self) -> None:
        self.scroll_offset = max(self.scroll_offset - 1, 0)