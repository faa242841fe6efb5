"""Save open documents when the editor window loses focus."""

__version__ = "0.1.0"
