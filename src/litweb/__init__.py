"""litweb: literate-programming tangle/weave processor."""

__version__ = "0.1.0"
