"""
Exception types raised by geocrypt.

Every exception derives from GeocryptError and from ValueError, so callers
that already guard input validation with ``except ValueError`` keep working.
"""

from typing import Optional


class GeocryptError(ValueError):
    """Base class for all geocrypt errors."""


class InvalidPrecisionError(GeocryptError):
    """A precision level is outside [MIN_PRECISION, MAX_PRECISION]."""

    def __init__(self, precision: int, position: Optional[int] = None):
        self.precision = precision
        self.position = position
        if position is None:
            msg = f"geocrypt: location precision out of range: {precision}"
        else:
            msg = f"geocrypt: location precision out of range: position {position}: {precision}"
        super().__init__(msg)


class InvalidBitCountError(GeocryptError):
    """A geohash bit count is outside the range an operation accepts."""

    def __init__(self, bits: int, low: int, high: int):
        self.bits = bits
        self.low = low
        self.high = high
        super().__init__(f"geocrypt: bit count {bits} out of range [{low}, {high}]")


class InvalidLocationError(GeocryptError):
    """Latitude or longitude is NaN or outside its valid range."""


class TextTooLongError(GeocryptError):
    """Note text is longer than the maximum number of bytes."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"geocrypt: note text is too long: {length} bytes > {limit}")


class InvalidBase32Error(GeocryptError):
    """Geohash text contains a character outside the alphabet, or is too long."""


class MalformedHashError(GeocryptError):
    """A hash segment cannot be parsed by the hashing primitive."""


class InvalidCostError(GeocryptError):
    """The hashing primitive does not support the requested cost."""

    def __init__(self, cost: int, low: int, high: int):
        self.cost = cost
        self.low = low
        self.high = high
        super().__init__(f"geocrypt: cost {cost} outside allowed range [{low}, {high}]")


class MismatchedHashAndLocationError(GeocryptError):
    """No tier of a hashed location matches the given location and note."""

    def __init__(self):
        super().__init__("geocrypt: hashed location is not the hash of the given location")
