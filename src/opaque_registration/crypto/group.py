"""ristretto255 group operations backed by libsodium."""

from __future__ import annotations

import hashlib

import pysodium

from ..errors import InvalidGroupElementError, InvalidScalarError, ProtocolError
from .constants import (
    ELEMENT_SIZE,
    HASH_BLOCK_SIZE,
    HASH_SIZE,
    HASH_TO_GROUP_DST,
    SCALAR_SIZE,
    UNIFORM_BYTES_SIZE,
)
from .utils import i2osp

IDENTITY = bytes(ELEMENT_SIZE)
ZERO_SCALAR = bytes(SCALAR_SIZE)


def expand_message_xmd(msg: bytes, dst: bytes, length: int) -> bytes:
    """Expand a message to uniform bytes with SHA-512 (RFC 9380, section 5.3.1).

    Args:
        msg: The input message.
        dst: The domain separation tag (at most 255 bytes).
        length: Number of output bytes.

    Returns:
        length pseudorandom bytes.

    Raises:
        ValueError: If dst or length are out of range.
    """
    ell = -(-length // HASH_SIZE)
    if ell > 255 or length > 65535:
        raise ValueError(f"Requested output length too large: {length}")
    if len(dst) > 255:
        raise ValueError(f"Domain separation tag too long: {len(dst)}")

    dst_prime = dst + i2osp(len(dst), 1)
    z_pad = bytes(HASH_BLOCK_SIZE)
    msg_prime = z_pad + msg + i2osp(length, 2) + i2osp(0, 1) + dst_prime

    b_0 = hashlib.sha512(msg_prime).digest()
    b_i = hashlib.sha512(b_0 + i2osp(1, 1) + dst_prime).digest()
    uniform = b_i
    for i in range(2, ell + 1):
        mixed = bytes(x ^ y for x, y in zip(b_0, b_i))
        b_i = hashlib.sha512(mixed + i2osp(i, 1) + dst_prime).digest()
        uniform += b_i
    return uniform[:length]


def hash_to_group(msg: bytes) -> bytes:
    """Map arbitrary bytes to a ristretto255 element."""
    uniform = expand_message_xmd(msg, HASH_TO_GROUP_DST, UNIFORM_BYTES_SIZE)
    return pysodium.crypto_core_ristretto255_from_hash(uniform)


def hash_to_scalar(msg: bytes, dst: bytes) -> bytes:
    """Map arbitrary bytes to a ristretto255 scalar (may be zero)."""
    uniform = expand_message_xmd(msg, dst, UNIFORM_BYTES_SIZE)
    return pysodium.crypto_core_ristretto255_scalar_reduce(uniform)


def reduce_scalar(uniform: bytes) -> bytes:
    """Reduce 64 uniform bytes modulo the group order."""
    return pysodium.crypto_core_ristretto255_scalar_reduce(uniform)


def is_identity(element: bytes) -> bool:
    return element == IDENTITY


def is_zero_scalar(scalar: bytes) -> bool:
    return scalar == ZERO_SCALAR


def validate_element(element: bytes, name: str = "group element") -> bytes:
    """Check that bytes encode a canonical, non-identity ristretto255 element.

    Args:
        element: The encoded element.
        name: Field name used in error messages.

    Returns:
        The element bytes, unchanged.

    Raises:
        InvalidGroupElementError: If the encoding is invalid or the identity.
    """
    if len(element) != ELEMENT_SIZE:
        raise InvalidGroupElementError(
            f"Invalid {name} length: {len(element)}, expected {ELEMENT_SIZE}"
        )
    if is_identity(element):
        raise InvalidGroupElementError(f"Invalid {name}: identity element")
    try:
        valid = pysodium.crypto_core_ristretto255_is_valid_point(element)
    except ValueError as e:
        raise InvalidGroupElementError(f"Invalid {name}: {e}") from e
    if not valid:
        raise InvalidGroupElementError(f"Invalid {name}: not a ristretto255 encoding")
    return element


def validate_scalar(scalar: bytes, name: str = "scalar") -> bytes:
    """Check that bytes encode a canonical, non-zero scalar.

    Raises:
        InvalidScalarError: If the scalar is non-canonical or zero.
    """
    if len(scalar) != SCALAR_SIZE:
        raise InvalidScalarError(f"Invalid {name} length: {len(scalar)}, expected {SCALAR_SIZE}")
    if is_zero_scalar(scalar):
        raise InvalidScalarError(f"Invalid {name}: zero")
    if reduce_scalar(scalar + bytes(UNIFORM_BYTES_SIZE - SCALAR_SIZE)) != scalar:
        raise InvalidScalarError(f"Invalid {name}: not reduced modulo the group order")
    return scalar


def scalar_mult(scalar: bytes, element: bytes) -> bytes:
    """Multiply a group element by a scalar.

    Raises:
        ProtocolError: If libsodium rejects the inputs or the result is the identity.
    """
    try:
        return pysodium.crypto_scalarmult_ristretto255(scalar, element)
    except ValueError as e:
        raise ProtocolError("Scalar multiplication produced an invalid element") from e


def scalar_mult_base(scalar: bytes) -> bytes:
    """Multiply the group generator by a scalar.

    Raises:
        ProtocolError: If the scalar is zero.
    """
    try:
        return pysodium.crypto_scalarmult_ristretto255_base(scalar)
    except ValueError as e:
        raise ProtocolError("Base point multiplication produced an invalid element") from e


def scalar_invert(scalar: bytes) -> bytes:
    """Invert a non-zero scalar modulo the group order.

    Raises:
        ProtocolError: If the scalar is zero.
    """
    if is_zero_scalar(scalar):
        raise ProtocolError("Cannot invert a zero scalar")
    try:
        return pysodium.crypto_core_ristretto255_scalar_invert(scalar)
    except ValueError as e:
        raise ProtocolError("Cannot invert a zero scalar") from e
