"""notebake - recursively inline linked notes into one document."""

__version__ = "0.1.0"
