"""
Geohash base32 codec.

The alphabet is the conventional geohash one, which leaves out the easily
confused letters a, i, l and o. Each character carries 5 bits; a 64-bit
value is written as 12 characters holding its low 60 bits, most significant
first.
"""

from types import MappingProxyType
from typing import Union

from .errors import InvalidBase32Error


ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"

# 60 is the largest multiple of both 4 and 5 within 64 bits.
DIGITS = 12

_DECODE = MappingProxyType({ord(c): i for i, c in enumerate(ALPHABET)})


def encode(value: int) -> str:
    """
    Encode the low 60 bits of value as 12 base32 digits.

    Callers wanting N bits of precision take the first N // 5 characters.
    """
    out = []
    for _ in range(DIGITS):
        out.append(ALPHABET[value & 0x1F])
        value >>= 5
    return "".join(reversed(out))


def decode(text: Union[str, bytes]) -> int:
    """
    Decode base32 text into an integer.

    Args:
        text: At most 12 characters from ALPHABET

    Returns:
        The accumulated value, 5 bits per character

    Raises:
        InvalidBase32Error: on any character outside the alphabet or
            input longer than 12 characters
    """
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidBase32Error(
                f"geocrypt: invalid base32 at position {e.start}"
            ) from e
    if len(text) > DIGITS:
        raise InvalidBase32Error(
            f"geocrypt: invalid base32: {len(text)} characters exceeds {DIGITS}"
        )

    x = 0
    for i, b in enumerate(text):
        v = _DECODE.get(b)
        if v is None:
            raise InvalidBase32Error(f"geocrypt: invalid base32 at position {i}: {chr(b)!r}")
        x = (x << 5) | v
    return x
