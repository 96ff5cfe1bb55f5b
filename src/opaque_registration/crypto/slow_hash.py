"""Argon2id password stretching."""

from __future__ import annotations

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from ..errors import SlowHashError
from .constants import HASH_SIZE, SLOW_HASH_SALT


def slow_hash(
    data: bytes,
    *,
    memory_cost: int,
    time_cost: int,
    parallelism: int,
    version: int,
) -> bytes:
    """Stretch a digest-sized input with Argon2id.

    The salt is the fixed all-zero minimum-length salt: the OPRF blinding
    already randomizes the protocol, and the server must derive the same
    output independently.

    Args:
        data: The input, exactly one hash digest long.
        memory_cost: Memory cost in KiB.
        time_cost: Number of passes.
        parallelism: Number of lanes.
        version: Argon2 version number.

    Returns:
        The stretched output, same length as the input.

    Raises:
        SlowHashError: If Argon2 rejects the parameters or fails.
    """
    if len(data) != HASH_SIZE:
        raise SlowHashError(f"Invalid slow hash input length: {len(data)}, expected {HASH_SIZE}")
    try:
        return hash_secret_raw(
            secret=data,
            salt=SLOW_HASH_SALT,
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=HASH_SIZE,
            type=Type.ID,
            version=version,
        )
    except (HashingError, OverflowError) as e:
        raise SlowHashError(f"Argon2 hashing failed: {e}") from e
