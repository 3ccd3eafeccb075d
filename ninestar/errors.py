"""
Exception types raised by the Nine-Star-Ki engine.

Each error also inherits from the built-in exception a caller would
naturally catch for the same condition (ValueError for bad input, etc.).
"""


class NineStarError(Exception):
    """Base class for all engine errors."""


class EmptyCollectionError(NineStarError, IndexError):
    """A circular operation was asked to index into an empty sequence."""


class ElementNotFoundError(NineStarError, ValueError):
    """The rotation target does not occur in the sequence."""


class AnchorSearchExhausted(NineStarError, RuntimeError):
    """No Jia-Zi day was found within the search radius."""


class InvalidDateInput(NineStarError, ValueError):
    """The date input could not be parsed."""


class EphemerisFieldMissing(NineStarError, LookupError):
    """The ephemeris returned a result shape we don't recognise."""
