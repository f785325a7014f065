from nyx_editor.highlighter import highlights_for_line
from nyx_editor.syntax import SyntaxState


def _parsed(lang, ext, source):
    state = SyntaxState(lang, ext)
    state.parse(source)
    return state


def test_highlights_for_line_returns_spans():
    source = "fn main() {}\n"
    state = _parsed("rust", "rs", source)
    spans = highlights_for_line(state, source, 0)
    assert spans
    assert (0, 2, "keyword") in spans


def test_empty_file_produces_no_spans():
    state = _parsed("json", "json", "")
    assert highlights_for_line(state, "", 0) == []


def test_line_out_of_range_returns_empty():
    source = "fn main() {}"
    state = _parsed("rust", "rs", source)
    assert highlights_for_line(state, source, 5) == []


def test_highlights_for_line_multiline():
    source = "let x = 42;\nfn foo() {}"
    state = _parsed("rust", "rs", source)
    spans0 = highlights_for_line(state, source, 0)
    assert (0, 3, "keyword") in spans0
    spans1 = highlights_for_line(state, source, 1)
    assert (0, 2, "keyword") in spans1


def test_highlights_for_line_unicode_uses_char_columns():
    source = "let å = 42;\n"
    state = _parsed("rust", "rs", source)
    spans = highlights_for_line(state, source, 0)
    numbers = [s for s in spans if s[2] == "number"]
    assert numbers == [(8, 10, "number")]


def test_span_crossing_lines_is_clipped():
    source = '"""a\nb"""'
    state = _parsed("python", "py", source)
    assert highlights_for_line(state, source, 0) == [(0, 5, "string")]
    assert highlights_for_line(state, source, 1) == [(0, 4, "string")]


def test_simple_rules_line_spans():
    source = "-- note\nSELECT 1"
    state = _parsed("sql", "sql", source)
    assert highlights_for_line(state, source, 0) == [(0, 7, "comment")]
    assert highlights_for_line(state, source, 1) == [
        (0, 6, "keyword"),
        (7, 8, "number"),
    ]