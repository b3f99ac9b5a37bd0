"""C4 architecture documentation engine."""

__version__ = "0.1.0"
