"""Shared fixtures: a reference server peer and deterministic random sources."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

import pysodium
import pytest

from opaque_registration.crypto.constants import DERIVE_KEY_PAIR_DST
from opaque_registration.crypto.group import hash_to_scalar
from opaque_registration.crypto.keypair import Keypair, derive_keypair
from opaque_registration.messages import RegistrationRequest, RegistrationResponse
from opaque_registration.suite import CipherSuite, SlowHashParameters


class DeterministicRandom:
    """Reproducible byte stream for tests (SHA-512 in counter mode)."""

    def __init__(self, seed: bytes) -> None:
        self._seed = seed
        self._counter = 0
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        out = b""
        while len(out) < n:
            out += hashlib.sha512(self._seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
        return out[:n]


@dataclass
class ReferenceServer:
    """Minimal server peer: evaluates the OPRF with a fixed key."""

    oprf_key: bytes
    keypair: Keypair

    def evaluate(self, blinded_element: bytes) -> bytes:
        return pysodium.crypto_scalarmult_ristretto255(self.oprf_key, blinded_element)

    def respond(self, request: RegistrationRequest) -> RegistrationResponse:
        return RegistrationResponse(
            evaluated_element=self.evaluate(request.blinded_element),
            server_public_key=self.keypair.public_key,
        )

    def respond_bytes(self, request_bytes: bytes) -> bytes:
        return self.respond(RegistrationRequest.deserialize(request_bytes)).serialize()


@pytest.fixture
def server() -> ReferenceServer:
    """Reference server with keys derived from fixed seeds."""
    oprf_key = hash_to_scalar(b"test oprf seed", DERIVE_KEY_PAIR_DST)
    return ReferenceServer(oprf_key=oprf_key, keypair=derive_keypair(b"\xa3" * 32, b"test server"))


@pytest.fixture
def fast_suite() -> CipherSuite:
    """Suite with cheap Argon2 parameters."""
    return CipherSuite(slow_hash=SlowHashParameters(memory_cost=64, time_cost=1, parallelism=1))
