"""
geocrypt: One-way hashing of geographic locations.

This package stores a privacy-preserving verifier for a location, optionally
bound to a short note, at one or more precision levels, and later confirms
whether a candidate location lies within the precision's error bound.
Locations are reduced to bit-interleaved geohash codes and hashed with an
adaptive one-way function (bcrypt by default).
"""

__version__ = "0.1.0"

from .precision import (
    MIN_PRECISION,
    MAX_PRECISION,
    DEFAULT_PRECISION,
    bits,
    prec,
    error,
    geohash,
    location,
)
from .hasher import Hasher, BcryptHasher, MockHasher, FunctionHasher
from .verifier import (
    MAX_TEXT_BYTES,
    LocationVerifier,
    VerifierConfig,
    hash_location,
    compare_location,
)
from .errors import (
    GeocryptError,
    InvalidPrecisionError,
    InvalidBitCountError,
    InvalidLocationError,
    TextTooLongError,
    InvalidBase32Error,
    MalformedHashError,
    InvalidCostError,
    MismatchedHashAndLocationError,
)

__all__ = [
    "MIN_PRECISION",
    "MAX_PRECISION",
    "DEFAULT_PRECISION",
    "MAX_TEXT_BYTES",
    "bits",
    "prec",
    "error",
    "geohash",
    "location",
    "Hasher",
    "BcryptHasher",
    "MockHasher",
    "FunctionHasher",
    "LocationVerifier",
    "VerifierConfig",
    "hash_location",
    "compare_location",
    "GeocryptError",
    "InvalidPrecisionError",
    "InvalidBitCountError",
    "InvalidLocationError",
    "TextTooLongError",
    "InvalidBase32Error",
    "MalformedHashError",
    "InvalidCostError",
    "MismatchedHashAndLocationError",
]
