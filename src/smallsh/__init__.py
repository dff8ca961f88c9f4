"""smallsh - a small interactive shell with job control."""

__version__ = "0.1.0"
