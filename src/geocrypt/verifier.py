"""
Location verifier build and check protocol.

A hashed location is one or more hasher outputs joined with b":", one per
precision tier, highest precision first. Every tier hashes the 8-byte
big-endian Morton code of the location, truncated to the tier's bit count,
followed by the note text.

The cost of each tier is tied to its precision by

    cost = 66 - bits

so coarser tiers, which leak less per guess, are made more expensive to
brute force. Since hashes record their own cost, the bit count of a tier is
recovered from the hash alone when comparing.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union
import logging
import struct

from . import morton
from .errors import (
    InvalidPrecisionError,
    MalformedHashError,
    MismatchedHashAndLocationError,
    TextTooLongError,
)
from .hasher import BcryptHasher, Hasher
from .precision import DEFAULT_PRECISION, MAX_PRECISION, MIN_PRECISION, bits as precision_bits


logger = logging.getLogger(__name__)


MAX_TEXT_BYTES = 64

# Sum of tier bit count and tier cost.
COST_BASE = 66

SEPARATOR = b":"


@dataclass
class VerifierConfig:
    """Configuration for a LocationVerifier."""

    default_precision: int = DEFAULT_PRECISION
    """Precision used when hash() is given none."""

    max_text_bytes: int = MAX_TEXT_BYTES
    """Longest note text accepted, in bytes."""

    def __post_init__(self):
        if not MIN_PRECISION <= self.default_precision <= MAX_PRECISION:
            raise ValueError(
                f"default_precision must be in [{MIN_PRECISION}, {MAX_PRECISION}]"
            )
        if not 0 <= self.max_text_bytes <= MAX_TEXT_BYTES:
            raise ValueError(f"max_text_bytes must be in [0, {MAX_TEXT_BYTES}]")


def cost_for_bits(bits: int) -> int:
    return COST_BASE - bits


def bits_for_cost(cost: int) -> int:
    return COST_BASE - cost


class LocationVerifier:
    """
    Builds and checks one-way verifiers for locations.

    The verifier holds no per-location state and may be shared between
    threads as long as its hasher can.
    """

    def __init__(self, hasher: Optional[Hasher] = None, config: Optional[VerifierConfig] = None):
        """
        Args:
            hasher: Adaptive hash primitive (default: BcryptHasher)
            config: Verifier configuration (default: VerifierConfig())
        """
        self.hasher = hasher if hasher is not None else BcryptHasher()
        self.config = config if config is not None else VerifierConfig()

    def _text_bytes(self, text: Union[str, bytes]) -> bytes:
        if isinstance(text, str):
            data = text.encode("utf-8")
        elif isinstance(text, (bytes, bytearray)):
            data = bytes(text)
        else:
            raise TypeError(f"note text must be str or bytes, not {type(text).__name__}")
        if len(data) > self.config.max_text_bytes:
            raise TextTooLongError(len(data), self.config.max_text_bytes)
        return data

    def normalize_precisions(self, precisions: Iterable[int]) -> List[int]:
        """
        Validate precisions and order them for hashing.

        Args:
            precisions: Precision levels in caller order

        Returns:
            Distinct precisions, highest first; [default_precision] when
            none are given

        Raises:
            InvalidPrecisionError: naming the position of the first
                out-of-range precision
        """
        precs = list(precisions)
        for i, p in enumerate(precs):
            if not MIN_PRECISION <= p <= MAX_PRECISION:
                raise InvalidPrecisionError(p, position=i)
        if not precs:
            return [self.config.default_precision]

        precs.sort(reverse=True)
        out = [precs[0]]
        for p in precs[1:]:
            if p != out[-1]:
                out.append(p)
        return out

    @staticmethod
    def _payload(code: int, bits: int, text: bytes) -> bytes:
        return struct.pack(">Q", morton.truncate(code, bits)) + text

    def hash(self, lat: float, lon: float, text: Union[str, bytes] = "", *precisions: int) -> bytes:
        """
        Hash a location and note text at one or more precisions.

        Args:
            lat: Latitude in degrees [-90, 90)
            lon: Longitude in degrees [-180, 180)
            text: Note text, at most max_text_bytes once encoded
            precisions: Precision levels [1, 9]

        Returns:
            Tier hashes joined with b":", highest precision first
        """
        data = self._text_bytes(text)
        precs = self.normalize_precisions(precisions)
        code = morton.encode(lat, lon)

        tiers = []
        for p in precs:
            bits = precision_bits(p)
            cost = cost_for_bits(bits)
            logger.debug(f"Hashing tier precision={p} bits={bits} cost={cost}")
            tiers.append(self.hasher.hash(self._payload(code, bits, data), cost))
        return SEPARATOR.join(tiers)

    def _compare_tier(self, hashed: bytes, code: int, text: bytes) -> Optional[int]:
        """Return the tier's bit count if it matches, None otherwise."""
        bits = bits_for_cost(self.hasher.cost(hashed))
        if not 1 <= bits <= morton.CODE_BITS:
            raise MalformedHashError(f"geocrypt: tier cost implies {bits} bits")
        if self.hasher.verify(hashed, self._payload(code, bits, text)):
            return bits
        return None

    def compare(self, hashed: Union[bytes, str], lat: float, lon: float, text: Union[str, bytes] = "") -> int:
        """
        Compare a hashed location with a location and note text.

        Tiers are tried in stored order and the first match wins, so a
        hash built at several precisions accepts a location that is close
        enough for any one of them.

        Args:
            hashed: Hashed location returned by hash()
            lat: Latitude in degrees [-90, 90)
            lon: Longitude in degrees [-180, 180)
            text: Note text

        Returns:
            Geohash bit count of the matching tier

        Raises:
            TextTooLongError: before any tier is tried
            MalformedHashError: if hashed is empty
            MismatchedHashAndLocationError: if no tier matches
        """
        data = self._text_bytes(text)
        if isinstance(hashed, str):
            try:
                hashed = hashed.encode("ascii")
            except UnicodeEncodeError as e:
                raise MalformedHashError("geocrypt: hashed location is not ASCII") from e
        if not hashed:
            raise MalformedHashError("geocrypt: empty hashed location")
        code = morton.encode(lat, lon)

        for i, tier in enumerate(hashed.split(SEPARATOR)):
            try:
                bits = self._compare_tier(tier, code, data)
            except MalformedHashError as e:
                logger.debug(f"Skipping tier {i}: {e}")
                continue
            if bits is not None:
                logger.debug(f"Tier {i} matched at {bits} bits")
                return bits
            logger.debug(f"Tier {i} did not match")
        raise MismatchedHashAndLocationError()


def hash_location(
    lat: float,
    lon: float,
    text: Union[str, bytes] = "",
    *precisions: int,
    hasher: Optional[Hasher] = None,
) -> bytes:
    """
    Convenience function to hash a location.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        text: Note text
        precisions: Precision levels; DEFAULT_PRECISION when none given
        hasher: Hash primitive (default: bcrypt)

    Returns:
        Hashed location
    """
    return LocationVerifier(hasher).hash(lat, lon, text, *precisions)


def compare_location(
    hashed: Union[bytes, str],
    lat: float,
    lon: float,
    text: Union[str, bytes] = "",
    hasher: Optional[Hasher] = None,
) -> int:
    """
    Convenience function to compare a hashed location.

    Returns:
        Geohash bit count of the first matching tier
    """
    return LocationVerifier(hasher).compare(hashed, lat, lon, text)
