"""TIL browser: a small FastAPI service over a tree of markdown notes."""

__version__ = "1.0.0"
