"""Byte encoding utilities for the OPAQUE registration engine."""

import base64
import re

# URL-safe alphabet, no padding
BASE64URL_PATTERN = re.compile(r"^[A-Za-z0-9_-]*\Z")


def i2osp(value: int, length: int) -> bytes:
    """Encode a non-negative integer as a big-endian byte string.

    Args:
        value: The integer to encode.
        length: The exact output length in bytes.

    Returns:
        The big-endian encoding of value.

    Raises:
        ValueError: If value does not fit in length bytes.
    """
    if value < 0 or value >= 1 << (8 * length):
        raise ValueError(f"Integer {value} does not fit in {length} bytes")
    return value.to_bytes(length, "big")


def to_base64url(data: bytes) -> str:
    """Encode bytes as unpadded URL-safe base64 (RFC 4648, section 5)."""
    return base64.b64encode(data, altchars=b"-_").rstrip(b"=").decode("ascii")


def from_base64url(s: str) -> bytes:
    """Decode an unpadded URL-safe base64 string to bytes.

    Args:
        s: The base64url string to decode.

    Returns:
        The decoded bytes.

    Raises:
        TypeError: If s is not a str.
        ValueError: If s contains padding, characters outside the URL-safe
            alphabet, or has an impossible length.
    """
    if not isinstance(s, str):
        raise TypeError(f"Expected str, got {type(s).__name__}")
    if not BASE64URL_PATTERN.match(s):
        raise ValueError("Base64url string contains non-Base64URL characters")
    if len(s) % 4 == 1:
        raise ValueError(f"Invalid base64url length: {len(s)}")
    padded = s + "=" * (-len(s) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)
