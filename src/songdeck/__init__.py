"""songdeck - terminal song catalog with add/edit/detail modal."""

__version__ = "0.1.0"
