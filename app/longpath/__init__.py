"""longpath - find filesystem paths that exceed a length limit."""

__version__ = "0.1.0"
