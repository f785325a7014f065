"""Mapping from file extensions to language names."""

from __future__ import annotations

_EXTENSION_LANGUAGES: dict[str, str] = {
    "rs": "rust",
    "json": "json",
    "py": "python",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "hpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "hh": "cpp",
    "cs": "csharp",
    "go": "go",
    "java": "java",
    "rb": "ruby",
    "php": "php",
    "sh": "bash",
    "bash": "bash",
    "css": "css",
    "html": "html",
    "htm": "html",
    "toml": "toml",
    "yml": "yaml",
    "yaml": "yaml",
    "md": "markdown",
    "lua": "lua",
    "swift": "swift",
    "scala": "scala",
    "zig": "zig",
    "ex": "elixir",
    "exs": "elixir",
    "hs": "haskell",
    "r": "r",
    "R": "r",
    "dart": "dart",
    "ml": "ocaml",
    "mli": "ocaml",
    "svelte": "svelte",
    "hbs": "handlebars",
    "handlebars": "handlebars",
    "sql": "sql",
    "Dockerfile": "dockerfile",
}


def language_for_extension(ext: str) -> str | None:
    """Return the language name for an extension (without dot), or None."""
    return _EXTENSION_LANGUAGES.get(ext)