from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a caller passes a value outside an operation's contract."""
