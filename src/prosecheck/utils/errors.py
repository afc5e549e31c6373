"""Typed exceptions for range handling and replay scripts."""


class RangeError(ValueError):
    """Base class for range related errors."""


class InvalidRangeError(RangeError):
    """Raised when range coordinates are negative or reversed."""


class PositionOutOfBoundsError(RangeError):
    """Raised when a position falls outside the document it refers to."""


class ScriptError(ValueError):
    """Raised when a replay script cannot be turned into actions."""
