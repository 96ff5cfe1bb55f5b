"""Key schedule, client key pair derivation and envelope construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.kdf.hkdf import HKDFExpand

from ..errors import ProtocolError
from .constants import (
    AUTH_KEY_LABEL,
    DERIVE_DH_KEY_PAIR_INFO,
    DERIVE_KEY_PAIR_DST,
    ENVELOPE_NONCE_LABEL,
    ENVELOPE_NONCE_SIZE,
    EXPORT_KEY_LABEL,
    HASH_SIZE,
    PRIVATE_KEY_LABEL,
    SEED_SIZE,
)
from .group import hash_to_scalar, is_zero_scalar, scalar_mult_base
from .utils import i2osp

logger = logging.getLogger("opaque_registration")

MAX_DERIVE_KEY_PAIR_ATTEMPTS = 256


@dataclass(frozen=True)
class Keypair:
    """ristretto255 Diffie-Hellman key pair.

    Attributes:
        private_key: The private scalar (32 bytes).
        public_key: The public element (32 bytes).
    """

    private_key: bytes
    public_key: bytes


@dataclass(frozen=True)
class EnvelopeKeys:
    """Keys expanded from the randomized password.

    Attributes:
        nonce: The envelope nonce.
        auth_key: MAC key for the envelope.
        export_key: Application key returned to the caller.
        seed: Seed for the client key pair.
    """

    nonce: bytes
    auth_key: bytes
    export_key: bytes
    seed: bytes


def hkdf_extract(salt: bytes, ikm: bytes) -> bytes:
    """HKDF-Extract with HMAC-SHA-512 (RFC 5869); an empty salt means HashLen zeros."""
    h = hmac.HMAC(salt or bytes(HASH_SIZE), hashes.SHA512())
    h.update(ikm)
    return h.finalize()


def hkdf_expand(prk: bytes, info: bytes, length: int) -> bytes:
    """HKDF-Expand with SHA-512."""
    return HKDFExpand(algorithm=hashes.SHA512(), length=length, info=info).derive(prk)


def mac(key: bytes, msg: bytes) -> bytes:
    h = hmac.HMAC(key, hashes.SHA512())
    h.update(msg)
    return h.finalize()


def randomize_password(oprf_output: bytes, stretched: bytes) -> bytes:
    """Combine the OPRF output and its stretched form into one pseudorandom key."""
    return hkdf_extract(b"", oprf_output + stretched)


def derive_envelope_keys(randomized_password: bytes) -> EnvelopeKeys:
    """Expand the randomized password into the envelope key material.

    The nonce is derived rather than sampled, so registration finish is a
    pure function of its inputs.
    """
    nonce = hkdf_expand(randomized_password, ENVELOPE_NONCE_LABEL, ENVELOPE_NONCE_SIZE)
    return EnvelopeKeys(
        nonce=nonce,
        auth_key=hkdf_expand(randomized_password, nonce + AUTH_KEY_LABEL, HASH_SIZE),
        export_key=hkdf_expand(randomized_password, nonce + EXPORT_KEY_LABEL, HASH_SIZE),
        seed=hkdf_expand(randomized_password, nonce + PRIVATE_KEY_LABEL, SEED_SIZE),
    )


def derive_keypair(seed: bytes, info: bytes = DERIVE_DH_KEY_PAIR_INFO) -> Keypair:
    """Deterministically derive a key pair from a seed (RFC 9497, DeriveKeyPair).

    Args:
        seed: The 32-byte seed.
        info: Public key derivation info.

    Returns:
        The derived key pair.

    Raises:
        ProtocolError: If every counter value yields the zero scalar.
    """
    derive_input = seed + i2osp(len(info), 2) + info
    for counter in range(MAX_DERIVE_KEY_PAIR_ATTEMPTS):
        private_key = hash_to_scalar(derive_input + i2osp(counter, 1), DERIVE_KEY_PAIR_DST)
        if not is_zero_scalar(private_key):
            return Keypair(private_key=private_key, public_key=scalar_mult_base(private_key))
        logger.debug("Derived zero scalar at counter %d", counter)
    raise ProtocolError("Failed to derive a key pair from seed")


def seal_envelope(keys: EnvelopeKeys, server_public_key: bytes, client_public_key: bytes) -> bytes:
    """Build the envelope: nonce || HMAC(auth_key, nonce || pkS || pkU)."""
    auth_tag = mac(keys.auth_key, keys.nonce + server_public_key + client_public_key)
    return keys.nonce + auth_tag
