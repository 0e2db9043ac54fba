"""Building blocks of a small database engine: full-text search and deadlock detection."""

__version__ = "0.1.0"