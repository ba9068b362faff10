"""Browse and edit SQLite database images from the command line."""

__version__ = "0.1.0"
