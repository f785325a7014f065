# nyx-editor

Building blocks for a modal text editor, with no GUI involved:

- **Language detection**: `nyx_editor.languages.language_for_extension("rs")` returns
  `"rust"`. For an unknown extension it returns `None`.
- **Keyword highlighting**: `nyx_editor.simple` scans SQL and Dockerfiles into
  `(start_byte, end_byte, capture_name)` spans. The capture names are `keyword`, `string`,
  `number` and `comment`. `simple_rules_for_language(name)` returns a `SimpleRules`, or
  `None` when the language has no simple rules. `compute_simple_highlights(rules, source)`
  runs the scan.
- **Syntax state**: `nyx_editor.syntax.SyntaxState(lang_name, extension)` holds the
  highlight spans for one buffer.
  - Languages with a built-in grammar get a token stream in `tree` after `parse()`. These
    include Rust, Python, JavaScript/TypeScript, C/C++, Go, Java and many others.
  - SQL and Dockerfiles use the simple rules, and their `tree` stays `None`.
  - `highlights` holds byte-offset spans with capture names such as `keyword`, `string`,
    `number`, `comment`, `function`, `type`, `operator` and `punctuation`.
  - `mark_dirty()` flags the state as out of date. `ensure_parsed(source)` parses again
    only if the state is dirty.
  - A language with no highlighting raises `UnsupportedLanguageError`.
- **Auto-indent**: `nyx_editor.indent` works out the indent for a new line from the line
  above it.
  - `copy_indent` counts that line's leading whitespace.
  - `bracket_indent` indents after unbalanced open brackets or a trailing `:` (but not
    `::`). It dedents after a line that starts with a closing bracket.
  - `compute_indent` uses `bracket_indent` when the syntax state has a parsed `tree`.
    Otherwise it uses `copy_indent`.
- **Per-line highlights**: `nyx_editor.highlighter.highlights_for_line(state, text, line_idx)`
  turns the byte spans into `(col_start, col_end, capture_name)` character columns,
  clipped to one line.
- **Side-by-side diffs**: `nyx_editor.diff`.
  - `parse_unified_diff` turns unified diff output into aligned `SideBySideLine` rows.
    Each row has a `left` and a `right` side, each `(line_number, text)` or `None`, and a
    `LineKind`.
  - `parse_hunk_header` extracts the start lines from an `@@ -L,S +R,S @@` header.
  - `DiffView(root, path, mode)` runs `git diff` for one file. `DiffMode.WORKING_TREE`
    diffs against the working tree and `DiffMode.STAGED` uses `--cached`. The view
    scrolls to just above the first change. It offers `reload()`, `toggle_mode()`,
    `scroll_down()` and `scroll_up()`.
- **Keybinding reference**: `nyx_editor.keybindings.KeybindingsView` lists the default
  bindings.
  - `filtered_entries()` does a case-insensitive search on the action or the key.
  - `type_text()` and `backspace()` edit the search.
  - `escape()` clears the search. When the search is already empty it returns `True`.
  - `categories_for_entries()` lists categories in first-seen order.

## What it does not do

The package has no editor window or text buffer of its own, and it does no drawing:
highlights come back as capture names, not colours or themes. It has no settings screen,
no language-server management and no command-line program. Incremental parsing is not
supported either, because every `parse()` scans the whole source again.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Example

```python
from nyx_editor.syntax import SyntaxState
from nyx_editor.indent import compute_indent
from nyx_editor.highlighter import highlights_for_line
from nyx_editor.diff import parse_unified_diff

sql = SyntaxState("sql", "sql")
sql.parse("SELECT id FROM users")
print(sql.highlights)          # [(0, 6, 'keyword'), (10, 14, 'keyword')]

source = "def foo():\n"
py = SyntaxState("python", "py")
py.parse(source)
print(compute_indent(source, py, 0, 4))      # 4
print(highlights_for_line(py, source, 0))

for row in parse_unified_diff("@@ -1 +1 @@\n-old\n+new\n"):
    print(row.kind, row.left, row.right)
```

`DiffView` needs `git` on the `PATH` and a repository at `root`.

## Tests

```
pytest
```