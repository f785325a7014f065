import pytest

from nyx_editor.keybindings import (
    KeybindingEntry,
    KeybindingsView,
    categories_for_entries,
)


def test_all_entries_have_non_empty_fields():
    view = KeybindingsView()
    assert view.entries
    for entry in view.entries:
        assert entry.category
        assert entry.action
        assert entry.key


def test_all_entries_have_valid_categories():
    valid = {"Navigation", "Editing", "Modes", "App"}
    view = KeybindingsView()
    assert all(entry.category in valid for entry in view.entries)


def test_empty_search_returns_all():
    view = KeybindingsView()
    assert len(view.filtered_entries()) == len(view.entries)


def test_search_matches_action_case_insensitive():
    view = KeybindingsView(search="Delete")
    filtered = view.filtered_entries()
    assert len(filtered) >= 2
    for entry in filtered:
        assert "delete" in entry.action.lower() or "delete" in entry.key.lower()
    actions = {entry.action for entry in filtered}
    assert {"Delete char", "Delete line"} <= actions


def test_search_matches_key():
    view = KeybindingsView(search="dd")
    filtered = view.filtered_entries()
    assert any(entry.key == "dd" for entry in filtered)


def test_search_no_matches_returns_empty():
    view = KeybindingsView(search="xyznonexistent")
    assert view.filtered_entries() == []


def test_categories_preserves_order_and_deduplicates():
    view = KeybindingsView()
    cats = categories_for_entries(view.filtered_entries())
    assert cats == ["Navigation", "Editing", "Modes", "App"]
    assert len(cats) == len(set(cats))


def test_search_hides_empty_categories():
    view = KeybindingsView(search="settings")
    cats = categories_for_entries(view.filtered_entries())
    assert cats == ["App"]


def test_categories_for_custom_entries():
    entries = [
        KeybindingEntry("B", "x", "1"),
        KeybindingEntry("A", "y", "2"),
        KeybindingEntry("B", "z", "3"),
    ]
    assert categories_for_entries(entries) == ["B", "A"]


def test_type_text_and_backspace_edit_search():
    view = KeybindingsView()
    view.type_text("un")
    view.type_text("do")
    assert view.search == "undo"
    assert [e.action for e in view.filtered_entries()] == ["Undo"]
    view.backspace()
    assert view.search == "und"


def test_backspace_on_empty_search_stays_empty():
    view = KeybindingsView()
    view.backspace()
    assert view.search == ""


@pytest.mark.parametrize("search, closes", [("", True), ("abc", False)])
def test_escape_clears_or_closes(search, closes):
    view = KeybindingsView(search=search)
    assert view.escape() is closes
    assert view.search == ""


def test_escape_twice_closes_after_clearing():
    view = KeybindingsView(search="yank")
    assert view.escape() is False
    assert view.escape() is True


def test_command_key_entries_present():
    view = KeybindingsView(search="\u2318p")
    assert [e.action for e in view.filtered_entries()] == ["Command Palette"]