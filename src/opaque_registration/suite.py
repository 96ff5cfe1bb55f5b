"""Cipher suite configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    ARGON2_VERSION,
    DEFAULT_ARGON2_MEMORY_COST,
    DEFAULT_ARGON2_PARALLELISM,
    DEFAULT_ARGON2_TIME_COST,
    DEFAULT_GROUP,
    DEFAULT_HASH,
    DEFAULT_KEY_EXCHANGE,
)
from .crypto.constants import OPRF_SUITE_ID
from .crypto.slow_hash import slow_hash


@dataclass(frozen=True)
class SlowHashParameters:
    """Argon2id configuration.

    The salt is not configurable: it is the fixed all-zero minimum-length
    salt shared with the server.

    Attributes:
        memory_cost: Memory cost in KiB.
        time_cost: Number of passes.
        parallelism: Number of lanes.
        version: Argon2 version number.
    """

    memory_cost: int = DEFAULT_ARGON2_MEMORY_COST
    time_cost: int = DEFAULT_ARGON2_TIME_COST
    parallelism: int = DEFAULT_ARGON2_PARALLELISM
    version: int = ARGON2_VERSION

    def hash(self, data: bytes) -> bytes:
        """Stretch data with these parameters.

        Raises:
            SlowHashError: If Argon2 rejects the parameters.
        """
        return slow_hash(
            data,
            memory_cost=self.memory_cost,
            time_cost=self.time_cost,
            parallelism=self.parallelism,
            version=self.version,
        )


@dataclass(frozen=True)
class CipherSuite:
    """Algorithm bindings shared out-of-band between client and server.

    Only one group/key exchange/hash combination exists; the slow hash cost
    may be tuned per deployment but must match the server.

    Attributes:
        group: Prime-order group for the OPRF and key exchange.
        key_exchange: Authenticated key exchange method.
        hash: Cryptographic hash function.
        slow_hash: Argon2id parameters.
    """

    group: str = DEFAULT_GROUP
    key_exchange: str = DEFAULT_KEY_EXCHANGE
    hash: str = DEFAULT_HASH
    slow_hash: SlowHashParameters = field(default_factory=SlowHashParameters)

    def __post_init__(self) -> None:
        if self.group != DEFAULT_GROUP:
            raise ValueError(f"Unsupported group: {self.group}, expected {DEFAULT_GROUP}")
        if self.key_exchange != DEFAULT_KEY_EXCHANGE:
            raise ValueError(
                f"Unsupported key exchange: {self.key_exchange}, expected {DEFAULT_KEY_EXCHANGE}"
            )
        if self.hash != DEFAULT_HASH:
            raise ValueError(f"Unsupported hash: {self.hash}, expected {DEFAULT_HASH}")

    @property
    def identifier(self) -> str:
        return OPRF_SUITE_ID.decode("ascii")


DEFAULT_CIPHER_SUITE = CipherSuite()
