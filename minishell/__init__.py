"""A small interactive shell over an in-memory filesystem."""

__version__ = "0.1.0"
__all__ = ["console", "errors", "filesystem", "shell"]