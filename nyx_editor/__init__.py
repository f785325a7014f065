"""Editor core: language detection, syntax highlighting, indentation, git diffs and keybindings."""

__version__ = "0.1.0"