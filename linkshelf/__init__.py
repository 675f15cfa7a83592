"""linkshelf: curated URL libraries and collections."""

__version__ = "0.1.0"
