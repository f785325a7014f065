import pytest

from nyx_editor.syntax import SyntaxState, UnsupportedLanguageError

ALL_GRAMMAR_LANGUAGES = [
    ("rust", "rs"),
    ("json", "json"),
    ("python", "py"),
    ("javascript", "js"),
    ("typescript", "ts"),
    ("c", "c"),
    ("cpp", "cpp"),
    ("csharp", "cs"),
    ("go", "go"),
    ("java", "java"),
    ("ruby", "rb"),
    ("php", "php"),
    ("bash", "sh"),
    ("css", "css"),
    ("html", "html"),
    ("toml", "toml"),
    ("yaml", "yml"),
    ("markdown", "md"),
    ("lua", "lua"),
    ("swift", "swift"),
    ("scala", "scala"),
    ("zig", "zig"),
    ("elixir", "ex"),
    ("haskell", "hs"),
    ("r", "r"),
    ("dart", "dart"),
    ("ocaml", "ml"),
    ("svelte", "svelte"),
    ("handlebars", "hbs"),
]


def names(state):
    return {name for _, _, name in state.highlights}


def test_create_syntax_state_for_rust():
    state = SyntaxState("rust", "rs")
    assert state.language_name == "rust"


def test_create_syntax_state_for_unknown_language():
    with pytest.raises(UnsupportedLanguageError):
        SyntaxState("brainfuck", "bf")


def test_mismatched_extension_without_simple_rules_raises():
    with pytest.raises(UnsupportedLanguageError):
        SyntaxState("rust", "py")


def test_parse_rust_source():
    state = SyntaxState("rust", "rs")
    state.parse("fn main() {}")
    assert state.tree is not None
    assert len(state.highlights) > 0


def test_tree_is_none_before_parse():
    state = SyntaxState("rust", "rs")
    assert state.tree is None


def test_dirty_flag_prevents_unnecessary_reparse():
    state = SyntaxState("rust", "rs")
    state.parse("fn main() {}")
    assert state.dirty is False
    state.mark_dirty()
    assert state.dirty is True
    state.ensure_parsed("fn main() {}")
    assert state.dirty is False


def test_ensure_parsed_skips_when_clean():
    state = SyntaxState("rust", "rs")
    state.parse("fn main() {}")
    before = list(state.highlights)
    state.ensure_parsed("let x = 1;")
    assert state.highlights == before


def test_parse_json_source():
    state = SyntaxState("json", "json")
    state.parse('{"key": "value", "num": 42}')
    assert state.tree is not None
    assert len(state.highlights) > 0
    assert (1, 6, "string") in state.highlights
    assert (24, 26, "number") in state.highlights


def test_highlights_contain_keyword_for_rust():
    state = SyntaxState("rust", "rs")
    state.parse("fn main() {}")
    assert (0, 2, "keyword") in state.highlights


def test_highlights_contain_function_for_rust():
    state = SyntaxState("rust", "rs")
    state.parse("fn main() {}")
    assert (3, 7, "function") in state.highlights


def test_rust_comment_and_string():
    source = '// hi\nlet s = "a\\"b";'
    state = SyntaxState("rust", "rs")
    state.parse(source)
    assert state.highlights[0] == (0, 5, "comment")
    spans = [source[s:e] for s, e, n in state.highlights if n == "string"]
    assert spans == ['"a\\"b"']


def test_offsets_are_bytes_for_non_ascii():
    state = SyntaxState("rust", "rs")
    state.parse("let å = 42;\n")
    assert (9, 11, "number") in state.highlights
    assert (0, 3, "keyword") in state.highlights


def test_python_def_highlights_function():
    state = SyntaxState("python", "py")
    state.parse("def foo():\n    return None\n")
    assert (0, 3, "keyword") in state.highlights
    assert (4, 7, "function") in state.highlights


def test_tsx_extension_uses_typescript():
    state = SyntaxState("typescript", "tsx")
    state.parse("const x = 1;")
    assert (0, 5, "keyword") in state.highlights


def test_create_syntax_state_for_sql():
    state = SyntaxState("sql", "sql")
    assert state.language_name == "sql"


def test_create_syntax_state_for_dockerfile():
    state = SyntaxState("dockerfile", "Dockerfile")
    assert state.language_name == "dockerfile"


def test_sql_tree_returns_none():
    state = SyntaxState("sql", "sql")
    state.parse("SELECT 1")
    assert state.tree is None


def test_parse_sql_source():
    state = SyntaxState("sql", "sql")
    state.parse("SELECT id FROM users WHERE active = true")
    assert len(state.highlights) > 0
    assert "keyword" in names(state)


def test_parse_dockerfile_source():
    state = SyntaxState("dockerfile", "Dockerfile")
    state.parse("FROM ubuntu:22.04\nRUN apt-get update")
    assert len(state.highlights) > 0
    assert "keyword" in names(state)


@pytest.mark.parametrize("lang, ext", ALL_GRAMMAR_LANGUAGES)
def test_all_grammars_available(lang, ext):
    state = SyntaxState(lang, ext)
    state.parse("x = 1 # 2\n")
    assert state.language_name == lang
    assert state.tree is not None


def test_simple_dirty_flag_works():
    state = SyntaxState("sql", "sql")
    state.parse("SELECT 1")
    assert state.dirty is False
    state.mark_dirty()
    assert state.dirty is True
    state.ensure_parsed("SELECT 2")
    assert state.dirty is False
    assert len(state.highlights) > 0