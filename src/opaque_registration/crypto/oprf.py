"""Client side of the ristretto255-SHA512 OPRF (RFC 9497, base mode)."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from ..errors import ProtocolError
from .constants import FINALIZE_LABEL, UNIFORM_BYTES_SIZE
from .group import (
    hash_to_group,
    is_identity,
    is_zero_scalar,
    reduce_scalar,
    scalar_invert,
    scalar_mult,
)
from .random import RandomSource, random_bytes
from .utils import i2osp

logger = logging.getLogger("opaque_registration")


@dataclass(frozen=True)
class BlindResult:
    """Output of the client blind step.

    Attributes:
        blind: The random blinding scalar (secret).
        blinded_element: The element sent to the server.
    """

    blind: bytes
    blinded_element: bytes


def random_scalar(rng: RandomSource | None) -> bytes:
    """Sample a uniformly random scalar (possibly zero)."""
    return reduce_scalar(random_bytes(rng, UNIFORM_BYTES_SIZE))


def blind(password: bytes, rng: RandomSource | None, max_attempts: int) -> BlindResult:
    """Blind the password with a fresh random scalar.

    Zero scalars and identity results are discarded and retried with fresh
    randomness.

    Args:
        password: The OPRF input.
        rng: The random source, or None for the OS CSPRNG.
        max_attempts: Number of scalars to draw before giving up.

    Returns:
        The blinding scalar and blinded element.

    Raises:
        RandomSourceError: If the random source fails.
        ProtocolError: If no usable blind was found within max_attempts.
    """
    input_element = hash_to_group(password)
    for attempt in range(1, max_attempts + 1):
        r = random_scalar(rng)
        if is_zero_scalar(r) or is_identity(input_element):
            logger.debug("Discarding unusable blind on attempt %d", attempt)
            continue
        try:
            blinded_element = scalar_mult(r, input_element)
        except ProtocolError:
            logger.debug("Blinded element rejected on attempt %d", attempt)
            continue
        return BlindResult(blind=r, blinded_element=blinded_element)
    raise ProtocolError(f"Failed to blind password after {max_attempts} attempts")


def finalize(password: bytes, blind_scalar: bytes, evaluated_element: bytes) -> bytes:
    """Unblind the server evaluation and hash it into the OPRF output.

    Args:
        password: The original OPRF input.
        blind_scalar: The scalar used in blind().
        evaluated_element: The server's evaluated element.

    Returns:
        The 64-byte OPRF output.

    Raises:
        ProtocolError: If the unblinding fails.
    """
    unblinded = scalar_mult(scalar_invert(blind_scalar), evaluated_element)
    return hashlib.sha512(
        i2osp(len(password), 2)
        + password
        + i2osp(len(unblinded), 2)
        + unblinded
        + FINALIZE_LABEL
    ).digest()
