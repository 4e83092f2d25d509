"""
Precision model: precision levels, geohash bit counts and error bounds.

A precision level p in [1, 9] maps linearly onto a geohash bit count:

    bits = 4 * (p + 6)        (28 .. 60)
    p    = bits // 4 - 6

Each bit count implies a maximum angular error, the size of the Morton cell
that truncation to that many bits can land in. Longitude always receives the
extra bit when the count is odd.
"""

import math
from typing import Tuple, Union

from . import base32, morton
from .errors import InvalidBitCountError


MIN_PRECISION = 1
MAX_PRECISION = 9

# Roughly one diagonal metre at the equator.
DEFAULT_PRECISION = 7

MIN_GEOHASH_BITS = 5
MAX_GEOHASH_BITS = 5 * base32.DIGITS

# Mean earth radius in metres.
EARTH_RADIUS = 6371e3


def bits(prec: int) -> int:
    """Return the geohash bit count for a precision level."""
    return 4 * (prec + 6)


def prec(bits: int) -> int:
    """Return the precision level for a geohash bit count."""
    return bits // 4 - 6


def error(bits: int) -> Tuple[float, float]:
    """
    Get the maximum latitude and longitude error for a bit count.

    Args:
        bits: Geohash bit count [1, 60]

    Returns:
        Tuple of (lat_err, lon_err) in degrees, or (nan, nan) when bits
        is out of range
    """
    if not 1 <= bits <= MAX_GEOHASH_BITS:
        return math.nan, math.nan
    lat_bits = bits // 2
    lon_bits = bits - lat_bits
    return math.ldexp(180.0, -lat_bits), math.ldexp(360.0, -lon_bits)


def geohash(lat: float, lon: float, bits: int) -> str:
    """
    Get the geohash text for a location.

    Args:
        lat: Latitude in degrees [-90, 90)
        lon: Longitude in degrees [-180, 180)
        bits: Bit precision [5, 60]; only whole characters are emitted,
            so the text holds bits // 5 characters

    Returns:
        Geohash text
    """
    if not MIN_GEOHASH_BITS <= bits <= MAX_GEOHASH_BITS:
        raise InvalidBitCountError(bits, MIN_GEOHASH_BITS, MAX_GEOHASH_BITS)
    # The 12 digits hold 60 bits; drop the low 4 so they are the top 60.
    return base32.encode(morton.encode(lat, lon) >> 4)[: bits // 5]


def location(text: Union[str, bytes]) -> Tuple[float, float, int]:
    """
    Get the location a geohash refers to.

    Args:
        text: Geohash text of 1 to 12 characters

    Returns:
        Tuple of (lat, lon, bits); lat and lon are the south-west corner
        of the geohash cell
    """
    n = 5 * len(text)
    if not MIN_GEOHASH_BITS <= n <= MAX_GEOHASH_BITS:
        raise InvalidBitCountError(n, MIN_GEOHASH_BITS, MAX_GEOHASH_BITS)
    value = base32.decode(text)
    code = (value << (morton.CODE_BITS - n)) & morton.MASK64
    lat, lon = morton.decode(code, n)
    return lat, lon, n


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two points."""
    sd_lat = math.sin(math.radians(lat2 - lat1) / 2)
    sd_lon = math.sin(math.radians(lon2 - lon1) / 2)
    a = sd_lat * sd_lat + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * sd_lon * sd_lon
    return 2 * EARTH_RADIUS * math.asin(math.sqrt(a))


def diagonal_metres(lat: float, lon: float, bits: int) -> float:
    """
    Length of the error box diagonal centred on a point, in metres.

    Returns nan when bits is outside the range error() accepts.
    """
    lat_err, lon_err = error(bits)
    if math.isnan(lat_err):
        return math.nan
    return haversine(lat - lat_err, lon - lon_err, lat + lat_err, lon + lon_err)
