"""Byte-oriented entry points for host runtimes.

These mirror the five operations a host exposes to its callers: start a
registration, read the request and state bytes, finish from state and
response bytes, and read the upload bytes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .crypto.random import RandomSource
from .errors import DecodeError
from .messages import ClientRegistrationState, RegistrationResponse
from .registration import (
    ClientRegistration,
    ClientRegistrationFinishResult,
    ClientRegistrationStartResult,
)
from .suite import DEFAULT_CIPHER_SUITE

_registration = ClientRegistration(DEFAULT_CIPHER_SUITE)


@dataclass(frozen=True)
class RegistrationStartHandle:
    """Opaque handle returned by client_register_start."""

    result: ClientRegistrationStartResult
    message_bytes: bytes
    state_bytes: bytes


@dataclass(frozen=True)
class RegistrationFinishHandle:
    """Opaque handle returned by client_register_finish."""

    result: ClientRegistrationFinishResult
    message_bytes: bytes


def _password_bytes(password: str | bytes) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def client_register_start(
    password: str | bytes, rng: RandomSource | None = None
) -> RegistrationStartHandle:
    """Start a registration. A str password is UTF-8 encoded."""
    result = _registration.start(_password_bytes(password), rng=rng)
    return RegistrationStartHandle(
        result=result,
        message_bytes=result.message.serialize(),
        state_bytes=result.state.serialize(),
    )


def get_registration_start_message(handle: RegistrationStartHandle) -> bytes:
    return handle.message_bytes


def get_registration_start_state(handle: RegistrationStartHandle) -> bytes:
    return handle.state_bytes


def client_register_finish(state: bytes, response: bytes) -> RegistrationFinishHandle:
    """Finish a registration from serialized state and server response.

    Raises:
        DecodeError: If either input is malformed.
        ProtocolError: If the response fails protocol checks.
        SlowHashError: If password stretching fails.
    """
    client_state = ClientRegistrationState.deserialize(state)
    try:
        server_response = RegistrationResponse.deserialize(response)
    except DecodeError:
        client_state.wipe()
        raise
    result = _registration.finish(client_state, server_response)
    return RegistrationFinishHandle(result=result, message_bytes=result.message.serialize())


def get_registration_finish_message(handle: RegistrationFinishHandle) -> bytes:
    return handle.message_bytes
