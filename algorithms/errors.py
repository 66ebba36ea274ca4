"""
Exceptions raised by the text compression algorithms.
"""


class InvalidArgumentError(ValueError):
    """Raised when an operation is called with unusable input."""


class FormatError(ValueError):
    """Raised when a compressed stream is malformed or corrupt."""
