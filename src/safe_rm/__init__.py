"""safe-rm - Wrapper around rm that refuses to delete protected paths."""

__version__ = "1.2.0"
