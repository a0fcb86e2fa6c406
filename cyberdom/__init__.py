"""Script conditions, clothing items and forms, dialog helpers and assignment tracking for scripted session games."""

__version__ = "0.1.0"
__all__ = ["assignments", "clothing", "dialogs", "scriptutils"]