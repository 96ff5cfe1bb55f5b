"""Cryptographic primitives for the OPAQUE registration engine."""

from .constants import ELEMENT_SIZE, ENVELOPE_SIZE, HASH_SIZE, SCALAR_SIZE
from .group import expand_message_xmd, hash_to_group, hash_to_scalar
from .keypair import Keypair, derive_keypair
from .oprf import BlindResult, blind, finalize
from .random import RandomSource, default_random_source
from .slow_hash import slow_hash
from .utils import from_base64url, to_base64url

__all__ = [
    "ELEMENT_SIZE",
    "ENVELOPE_SIZE",
    "HASH_SIZE",
    "SCALAR_SIZE",
    "BlindResult",
    "Keypair",
    "RandomSource",
    "blind",
    "default_random_source",
    "derive_keypair",
    "expand_message_xmd",
    "finalize",
    "from_base64url",
    "hash_to_group",
    "hash_to_scalar",
    "slow_hash",
    "to_base64url",
]
