"""Tests for base32 codec."""

import random

import pytest
from geocrypt.base32 import ALPHABET, DIGITS, decode, encode
from geocrypt.errors import InvalidBase32Error


class TestEncode:
    """Tests for base32 encoding."""

    def test_zero(self):
        """Test zero encodes to all-zero digits."""
        assert encode(0) == "0" * DIGITS

    def test_fixed_width(self):
        """Test output is always 12 characters."""
        assert len(encode(1)) == DIGITS
        assert len(encode(2**60 - 1)) == DIGITS

    def test_most_significant_first(self):
        """Test the first digit holds the highest 5 bits."""
        assert encode(31 << 55) == "z" + "0" * (DIGITS - 1)
        assert encode(10) == "0" * (DIGITS - 1) + "b"

    def test_drops_bits_above_60(self):
        """Test only the low 60 bits are encoded."""
        assert encode((1 << 60) | 5) == encode(5)

    def test_alphabet_excludes_ambiguous(self):
        """Test a, i, l and o never appear."""
        for c in "ailo":
            assert c not in ALPHABET
        assert len(ALPHABET) == 32


class TestDecode:
    """Tests for base32 decoding."""

    def test_round_trip(self):
        """Test decode inverts encode for 60-bit values."""
        random.seed(42)
        for _ in range(1000):
            x = random.getrandbits(60)
            assert decode(encode(x)) == x

    def test_bytes_input(self):
        """Test bytes are accepted as well as str."""
        assert decode(b"zz") == decode("zz") == 1023

    def test_empty(self):
        """Test empty input decodes to zero."""
        assert decode("") == 0

    @pytest.mark.parametrize("bad", ["a", "i", "l", "o", "A", "/", ":", "{", " ", "9a"])
    def test_invalid_characters(self, bad):
        """Test characters outside the alphabet are rejected."""
        with pytest.raises(InvalidBase32Error):
            decode(bad)

    def test_non_ascii(self):
        """Test non-ASCII text is rejected."""
        with pytest.raises(InvalidBase32Error):
            decode("dr5é")

    def test_too_long(self):
        """Test more than 12 characters is rejected."""
        with pytest.raises(InvalidBase32Error):
            decode("0" * (DIGITS + 1))

    def test_error_names_position(self):
        """Test the error message points at the offending character."""
        with pytest.raises(InvalidBase32Error, match="position 2"):
            decode("bca")
