"""Searchable list of the editor's keybindings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeybindingEntry:
    """One action and the key that triggers it."""

    category: str
    action: str
    key: str


_ALL_ENTRIES: tuple[tuple[str, str, str], ...] = (
    ("Navigation", "Move left", "h"),
    ("Navigation", "Move down", "j"),
    ("Navigation", "Move up", "k"),
    ("Navigation", "Move right", "l"),
    ("Navigation", "Word forward", "w"),
    ("Navigation", "Word backward", "b"),
    ("Navigation", "Word end", "e"),
    ("Navigation", "Line start", "0"),
    ("Navigation", "Line end", "$"),
    ("Navigation", "First non-blank", "^"),
    ("Navigation", "File top", "gg"),
    ("Navigation", "File bottom", "G"),
    ("Editing", "Delete char", "x"),
    ("Editing", "Delete line", "dd"),
    ("Editing", "Change line", "cc"),
    ("Editing", "Yank line", "yy"),
    ("Editing", "Paste", "p"),
    ("Editing", "Undo", "u"),
    ("Editing", "Redo", "Ctrl+R"),
    ("Editing", "Repeat last", "."),
    ("Editing", "Search forward", "/"),
    ("Editing", "Search backward", "?"),
    ("Editing", "Next match", "n"),
    ("Editing", "Previous match", "N"),
    ("Modes", "Insert", "i"),
    ("Modes", "Append", "a"),
    ("Modes", "Append end of line", "A"),
    ("Modes", "Insert first non-blank", "I"),
    ("Modes", "Open below", "o"),
    ("Modes", "Open above", "O"),
    ("Modes", "Visual", "v"),
    ("Modes", "Visual line", "V"),
    ("Modes", "Visual block", "Ctrl+V"),
    ("Modes", "Command", ":"),
    ("App", "Settings", "\u2318,"),
    ("App", "Keybindings", "\u2318K"),
    ("App", "Save", ":w"),
    ("App", "Quit", ":q"),
    ("App", "Force quit", ":q!"),
    ("App", "LSP Servers", "\u2318L"),
    ("Editing", "Autocomplete", "Ctrl+Space"),
    ("App", "Toggle File Explorer", "\u2318B"),
    ("App", "Command Palette", "\u2318P"),
    ("App", "Focus Left Panel", "Ctrl+H"),
    ("App", "Focus Bottom Panel", "Ctrl+J"),
    ("App", "Focus Right Panel", "Ctrl+L"),
)


def _default_entries() -> list[KeybindingEntry]:
    return [KeybindingEntry(*fields) for fields in _ALL_ENTRIES]


def categories_for_entries(entries: Iterable[KeybindingEntry]) -> list[str]:
    """Return the categories of ``entries`` in first-seen order, without repeats."""
    return list(dict.fromkeys(entry.category for entry in entries))


@dataclass
class KeybindingsView:
    """Keybindings overlay state: the entries and the current search text."""

    search: str = ""
    entries: list[KeybindingEntry] = field(default_factory=_default_entries)

    def filtered_entries(self) -> list[KeybindingEntry]:
        """Entries whose action or key contains the search text, ignoring case."""
        if not self.search:
            return list(self.entries)
        query = self.search.lower()
        return [
            entry
            for entry in self.entries
            if query in entry.action.lower() or query in entry.key.lower()
        ]

    def type_text(self, text: str) -> None:
        """Append typed text to the search."""
        self.search += text

    def backspace(self) -> None:
        """Remove the last character of the search."""
        self.search = self.search[:-1]

    def escape(self) -> bool:
        """Clear the search, or return True if the overlay should close."""
        if not self.search:
            return True
        self.search = ""
        return False