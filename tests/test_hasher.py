"""Tests for hash primitives."""

import pytest
from geocrypt.errors import InvalidCostError, MalformedHashError
from geocrypt.hasher import BcryptHasher, FunctionHasher, Hasher, MockHasher


class TestBcryptHasher:
    """Tests for BcryptHasher."""

    def test_hash_verify(self):
        """Test a hash verifies its own input only."""
        hasher = BcryptHasher()
        h = hasher.hash(b"\x00\x01location\x00", 4)
        assert hasher.verify(h, b"\x00\x01location\x00")
        assert not hasher.verify(h, b"\x00\x01location\x01")

    def test_self_describing_cost(self):
        """Test the cost is recovered from the hash."""
        hasher = BcryptHasher()
        h = hasher.hash(b"data", 5)
        assert h.startswith(b"$2b$05$")
        assert hasher.cost(h) == 5

    def test_2a_prefix(self):
        """Test hashes can be produced with the 2a prefix."""
        hasher = BcryptHasher(prefix=b"2a")
        h = hasher.hash(b"data", 4)
        assert h.startswith(b"$2a$04$")
        assert hasher.verify(h, b"data")

    def test_invalid_prefix(self):
        """Test unknown prefixes are rejected."""
        with pytest.raises(ValueError):
            BcryptHasher(prefix=b"2y")

    def test_max_input(self):
        """Test 72 bytes of input, the geohash plus longest note, is accepted."""
        hasher = BcryptHasher()
        data = bytes(8) + b"n" * 64
        h = hasher.hash(data, 4)
        assert hasher.verify(h, data)

    @pytest.mark.parametrize("cost", [3, 32, 38])
    def test_unsupported_cost(self, cost):
        """Test costs outside [4, 31] are rejected."""
        with pytest.raises(InvalidCostError):
            BcryptHasher().hash(b"data", cost)

    @pytest.mark.parametrize("bad", [
        b"",
        b"garbage",
        b"$2b$06$short",
        b"$3b$06$" + b"." * 53,
        b"$2b$99$" + b"." * 53,
        b"$2b$06$" + b"!" * 53,
    ])
    def test_malformed_cost(self, bad):
        """Test unparseable hashes raise MalformedHashError."""
        with pytest.raises(MalformedHashError):
            BcryptHasher().cost(bad)

    def test_malformed_verify(self):
        """Test verify rejects unparseable hashes."""
        with pytest.raises(MalformedHashError):
            BcryptHasher().verify(b"garbage", b"data")

    def test_is_hasher(self):
        """Test BcryptHasher implements the Hasher interface."""
        assert isinstance(BcryptHasher(), Hasher)


class TestMockHasher:
    """Tests for MockHasher."""

    def test_hash_verify(self):
        """Test a mock hash verifies its own input only."""
        hasher = MockHasher()
        h = hasher.hash(b"data", 30)
        assert hasher.verify(h, b"data")
        assert not hasher.verify(h, b"date")

    def test_cost(self):
        """Test the cost is recorded in the hash."""
        hasher = MockHasher()
        assert hasher.cost(hasher.hash(b"data", 7)) == 7

    def test_salted(self):
        """Test random salts make hashes differ."""
        hasher = MockHasher()
        assert hasher.hash(b"data", 7) != hasher.hash(b"data", 7)

    def test_fixed_salt(self):
        """Test a fixed salt makes output deterministic."""
        hasher = MockHasher(salt=bytes(16))
        assert hasher.hash(b"data", 7) == hasher.hash(b"data", 7)

    def test_cost_bound(self):
        """Test the cost is bound into the digest."""
        hasher = MockHasher(salt=bytes(16))
        h = hasher.hash(b"data", 7)
        forged = h.replace(b"$07$", b"$08$", 1)
        assert not hasher.verify(forged, b"data")

    def test_cost_range(self):
        """Test costs outside the configured range are rejected."""
        hasher = MockHasher(min_cost=4, max_cost=31)
        with pytest.raises(InvalidCostError):
            hasher.hash(b"data", 38)

    def test_no_separator(self):
        """Test output never contains the tier separator."""
        assert b":" not in MockHasher().hash(b"a:b", 10)

    def test_invalid_config(self):
        """Test invalid constructor arguments are rejected."""
        with pytest.raises(ValueError):
            MockHasher(min_cost=10, max_cost=5)
        with pytest.raises(ValueError):
            MockHasher(salt=b"short")

    def test_malformed(self):
        """Test unparseable hashes raise MalformedHashError."""
        hasher = MockHasher()
        with pytest.raises(MalformedHashError):
            hasher.cost(b"$2b$06$" + b"." * 53)
        with pytest.raises(MalformedHashError):
            hasher.verify(b"nope", b"data")


class TestFunctionHasher:
    """Tests for FunctionHasher."""

    def test_delegates(self):
        """Test each operation calls the wrapped function."""
        inner = MockHasher()
        hasher = FunctionHasher(inner.hash, inner.verify, inner.cost)
        h = hasher.hash(b"data", 12)
        assert hasher.cost(h) == 12
        assert hasher.verify(h, b"data")
        assert inner.verify(h, b"data")
