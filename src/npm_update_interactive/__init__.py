"""npm-update-interactive: upgrade npm dependencies interactively."""

__version__ = "0.1.0"
