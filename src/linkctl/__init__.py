"""linkctl — a personal catalogue of named links, aliases, and groups."""

__version__ = "0.1.0"
