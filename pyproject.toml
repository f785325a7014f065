[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nyx-editor"
version = "0.1.0"
description = "Editor core pieces: language detection, syntax highlighting, auto-indent, side-by-side git diffs and a keybinding reference"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "syntax-highlighting", "indent", "diff", "keybindings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nyx_editor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
