"""
Adaptive one-way hash primitives.

This module defines the hasher protocol the verifier is built on and
provides the bcrypt implementation along with a fast mock for testing.

A hasher must produce salted, self-describing output: the cost a hash was
computed with has to be recoverable from the hash alone, since the verifier
derives each tier's geohash precision from it.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import hashlib
import hmac
import logging
import os
import re

import bcrypt

from .errors import InvalidCostError, MalformedHashError


logger = logging.getLogger(__name__)


class Hasher(ABC):
    """
    Abstract base class for adaptive hash primitives.

    Any primitive providing these three operations can back a
    LocationVerifier.
    """

    @abstractmethod
    def hash(self, data: bytes, cost: int) -> bytes:
        """
        Hash data with a fresh salt at the given cost.

        Args:
            data: Bytes to hash
            cost: Work factor

        Returns:
            Self-describing hash, never containing b":"
        """
        pass

    @abstractmethod
    def verify(self, hashed: bytes, data: bytes) -> bool:
        """
        Check whether data hashes to hashed.

        Raises:
            MalformedHashError: if hashed cannot be parsed
        """
        pass

    @abstractmethod
    def cost(self, hashed: bytes) -> int:
        """
        Extract the cost a hash was computed with.

        Raises:
            MalformedHashError: if hashed cannot be parsed
        """
        pass


class FunctionHasher(Hasher):
    """
    Hasher wrapper for three plain functions.

    Wraps callables (data, cost) -> hashed, (hashed, data) -> bool and
    hashed -> cost.
    """

    def __init__(
        self,
        hash_func: Callable[[bytes, int], bytes],
        verify_func: Callable[[bytes, bytes], bool],
        cost_func: Callable[[bytes], int],
    ):
        self._hash = hash_func
        self._verify = verify_func
        self._cost = cost_func

    def hash(self, data: bytes, cost: int) -> bytes:
        return self._hash(data, cost)

    def verify(self, hashed: bytes, data: bytes) -> bool:
        return self._verify(hashed, data)

    def cost(self, hashed: bytes) -> int:
        return self._cost(hashed)


# $2b$NN$ followed by 22 characters of salt and 31 of hash.
_BCRYPT_RE = re.compile(rb"^\$2[abxy]?\$(\d\d)\$[./A-Za-z0-9]{53}$")


class BcryptHasher(Hasher):
    """
    bcrypt-backed hasher.

    bcrypt only considers the first 72 bytes of input, which is exactly the
    8-byte geohash plus the longest allowed note text.
    """

    MIN_COST = 4
    MAX_COST = 31

    def __init__(self, prefix: bytes = b"2b"):
        """
        Args:
            prefix: bcrypt version prefix for new hashes (b"2a" or b"2b")
        """
        if prefix not in (b"2a", b"2b"):
            raise ValueError("prefix must be b'2a' or b'2b'")
        self.prefix = prefix

    def hash(self, data: bytes, cost: int) -> bytes:
        if not self.MIN_COST <= cost <= self.MAX_COST:
            raise InvalidCostError(cost, self.MIN_COST, self.MAX_COST)
        logger.debug(f"bcrypt hashing at cost {cost}")
        return bcrypt.hashpw(data, bcrypt.gensalt(rounds=cost, prefix=self.prefix))

    def verify(self, hashed: bytes, data: bytes) -> bool:
        self.cost(hashed)
        try:
            return bcrypt.checkpw(data, hashed)
        except ValueError as e:
            raise MalformedHashError(f"geocrypt: malformed bcrypt hash: {e}") from e

    def cost(self, hashed: bytes) -> int:
        m = _BCRYPT_RE.match(hashed)
        if m is None:
            raise MalformedHashError("geocrypt: malformed bcrypt hash")
        cost = int(m.group(1))
        if not self.MIN_COST <= cost <= self.MAX_COST:
            raise MalformedHashError(f"geocrypt: bcrypt hash has invalid cost {cost}")
        return cost


_MOCK_RE = re.compile(rb"^\$mock\$(\d\d)\$([0-9a-f]{32})\$([0-9a-f]{64})$")


class MockHasher(Hasher):
    """
    Fast salted SHA-256 stand-in for testing.

    Produces bcrypt-shaped, self-describing output ($mock$NN$salt$digest)
    but does no key stretching: the cost is recorded, not spent. Never use
    it to protect real locations.
    """

    def __init__(self, min_cost: int = 0, max_cost: int = 99, salt: Optional[bytes] = None):
        """
        Args:
            min_cost: Lowest cost accepted by hash()
            max_cost: Highest cost accepted by hash() (at most 99)
            salt: Fixed 16-byte salt for deterministic output; random if None
        """
        if not 0 <= min_cost <= max_cost <= 99:
            raise ValueError("costs must satisfy 0 <= min_cost <= max_cost <= 99")
        if salt is not None and len(salt) != 16:
            raise ValueError("salt must be 16 bytes")
        self.min_cost = min_cost
        self.max_cost = max_cost
        self._salt = salt

    @staticmethod
    def _digest(salt: bytes, cost: int, data: bytes) -> bytes:
        return hashlib.sha256(salt + bytes([cost]) + data).hexdigest().encode("ascii")

    def hash(self, data: bytes, cost: int) -> bytes:
        if not self.min_cost <= cost <= self.max_cost:
            raise InvalidCostError(cost, self.min_cost, self.max_cost)
        salt = self._salt if self._salt is not None else os.urandom(16)
        return b"$mock$%02d$%s$%s" % (cost, salt.hex().encode("ascii"), self._digest(salt, cost, data))

    def verify(self, hashed: bytes, data: bytes) -> bool:
        m = _MOCK_RE.match(hashed)
        if m is None:
            raise MalformedHashError("geocrypt: malformed mock hash")
        cost = int(m.group(1))
        salt = bytes.fromhex(m.group(2).decode("ascii"))
        return hmac.compare_digest(m.group(3), self._digest(salt, cost, data))

    def cost(self, hashed: bytes) -> int:
        m = _MOCK_RE.match(hashed)
        if m is None:
            raise MalformedHashError("geocrypt: malformed mock hash")
        return int(m.group(1))
