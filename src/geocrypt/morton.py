"""
Morton encoding module for converting between WGS84 coordinates and 64-bit codes.

Latitude and longitude are each normalized into [0, 1) and projected onto an
unsigned 32-bit fixed-point grid:

    ilat = trunc(2^32 * (lat + 90) / 180)
    ilon = trunc(2^32 * (lon + 180) / 360)

The two 32-bit values are then bit-interleaved into one 64-bit Morton code.
Latitude bits occupy the even positions and longitude bits the odd ones, so
the most significant bit of a code always belongs to longitude.

Keeping only the top N bits of a code selects a cell whose size is given by
precision.error(N); truncation is always toward zero (the cell's south-west
corner), never rounding.
"""

import math
from typing import Tuple

from .errors import InvalidBitCountError, InvalidLocationError


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF
CODE_BITS = 64


def check_coords(lat: float, lon: float) -> None:
    """
    Validate a coordinate pair.

    Raises:
        InvalidLocationError: if either value is NaN or out of range
    """
    if math.isnan(lat) or not -90.0 <= lat < 90.0:
        raise InvalidLocationError(f"geocrypt: latitude {lat} outside [-90, 90)")
    if math.isnan(lon) or not -180.0 <= lon < 180.0:
        raise InvalidLocationError(f"geocrypt: longitude {lon} outside [-180, 180)")


def to_fixed(lat: float, lon: float) -> Tuple[int, int]:
    """
    Project degrees onto the unsigned 32-bit fixed-point grid.

    Args:
        lat: Latitude in degrees [-90, 90)
        lon: Longitude in degrees [-180, 180)

    Returns:
        Tuple of (ilat, ilon), each in [0, 2^32)
    """
    # Inputs a hair below the upper bound can round up to 2^32.
    ilat = min(int(math.ldexp((lat + 90.0) / 180.0, 32)), MASK32)
    ilon = min(int(math.ldexp((lon + 180.0) / 360.0, 32)), MASK32)
    return ilat, ilon


def from_fixed(ilat: int, ilon: int) -> Tuple[float, float]:
    """Invert to_fixed, returning the south-west corner of the grid cell."""
    lat = math.ldexp(float(ilat) * 180.0, -32) - 90.0
    lon = math.ldexp(float(ilon) * 360.0, -32) - 180.0
    return lat, lon


def spread(x: int) -> int:
    """
    Spread the 32 bits of x onto the even bit positions of a 64-bit value.

    http://graphics.stanford.edu/~seander/bithacks.html#InterleaveBMN
    """
    x &= MASK32
    x = (x | (x << 16)) & 0x0000FFFF0000FFFF
    x = (x | (x << 8)) & 0x00FF00FF00FF00FF
    x = (x | (x << 4)) & 0x0F0F0F0F0F0F0F0F
    x = (x | (x << 2)) & 0x3333333333333333
    x = (x | (x << 1)) & 0x5555555555555555
    return x


def squash(x: int) -> int:
    """Inverse of spread: gather the even bits of a 64-bit value into 32 bits."""
    x &= 0x5555555555555555
    x = (x | (x >> 1)) & 0x3333333333333333
    x = (x | (x >> 2)) & 0x0F0F0F0F0F0F0F0F
    x = (x | (x >> 4)) & 0x00FF00FF00FF00FF
    x = (x | (x >> 8)) & 0x0000FFFF0000FFFF
    return (x | (x >> 16)) & MASK32


def interleave(ilat: int, ilon: int) -> int:
    return spread(ilat) | (spread(ilon) << 1)


def deinterleave(code: int) -> Tuple[int, int]:
    return squash(code), squash(code >> 1)


def truncate(code: int, bits: int) -> int:
    """
    Zero every bit of a 64-bit code below the top `bits` bits.

    Args:
        code: Morton code
        bits: Number of leading bits to keep [0, 64]

    Returns:
        The truncated code
    """
    if not 0 <= bits <= CODE_BITS:
        raise InvalidBitCountError(bits, 0, CODE_BITS)
    return code & ((MASK64 << (CODE_BITS - bits)) & MASK64)


def encode(lat: float, lon: float) -> int:
    """
    Convert WGS84 coordinates to a 64-bit Morton code.

    Args:
        lat: Latitude in degrees [-90, 90)
        lon: Longitude in degrees [-180, 180)

    Returns:
        Interleaved code in [0, 2^64)
    """
    check_coords(lat, lon)
    return interleave(*to_fixed(lat, lon))


def decode(code: int, bits: int = CODE_BITS) -> Tuple[float, float]:
    """
    Convert a Morton code back to WGS84 coordinates.

    Args:
        code: Morton code
        bits: Number of leading bits of `code` that are significant

    Returns:
        Tuple of (lat, lon) in degrees

    Bits below the requested precision are zeroed before decoding, so the
    result is the south-west corner of the cell the code identifies.
    """
    return from_fixed(*deinterleave(truncate(code, bits)))
