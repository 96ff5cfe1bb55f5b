"""Secure random source handling for the OPAQUE registration engine."""

from __future__ import annotations

import secrets
from collections.abc import Callable

from ..errors import RandomSourceError

# Callable returning n bytes of secure randomness
RandomSource = Callable[[int], bytes]


def default_random_source(n: int) -> bytes:
    """Draw n bytes from the operating system CSPRNG."""
    return secrets.token_bytes(n)


def random_bytes(rng: RandomSource | None, n: int) -> bytes:
    """Draw exactly n bytes from rng, or the OS CSPRNG if rng is None.

    Args:
        rng: The injected random source.
        n: Number of bytes required.

    Returns:
        n random bytes.

    Raises:
        RandomSourceError: If the source fails or returns the wrong amount of data.
    """
    source = rng if rng is not None else default_random_source
    try:
        data = source(n)
    except Exception as e:
        raise RandomSourceError(f"Secure random source unavailable: {e}") from e
    if not isinstance(data, (bytes, bytearray)) or len(data) != n:
        raise RandomSourceError(f"Random source returned malformed output, expected {n} bytes")
    return bytes(data)
