"""Wire messages and client state, with their binary encodings.

Field order and sizes:

- RegistrationRequest: blinded_element (32)
- RegistrationResponse: evaluated_element (32) || server_public_key (32)
- RegistrationUpload: envelope_len (u16) || envelope || client_public_key (32)
- ClientRegistrationState: version (1) || blind (32) || password_len (u32) || password

Integers are big-endian.
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TypeVar

from .constants import MAX_PASSWORD_LENGTH, STATE_VERSION
from .crypto.constants import ELEMENT_SIZE, ENVELOPE_SIZE, SCALAR_SIZE
from .crypto.group import validate_element, validate_scalar
from .crypto.utils import from_base64url, to_base64url
from .errors import (
    DecodeError,
    EnvelopeSizeError,
    StateConsumedError,
    TrailingBytesError,
    TruncatedMessageError,
    UnsupportedVersionError,
)


class _Reader:
    """Sequential reader over message bytes that reports truncation and trailing data."""

    def __init__(self, data: bytes, message: str) -> None:
        self._data = bytes(data)
        self._offset = 0
        self._message = message

    def read(self, n: int) -> bytes:
        end = self._offset + n
        if end > len(self._data):
            raise TruncatedMessageError(f"Truncated {self._message}", end, len(self._data))
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def read_u8(self) -> int:
        return struct.unpack("!B", self.read(1))[0]

    def read_u16(self) -> int:
        return struct.unpack("!H", self.read(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("!I", self.read(4))[0]

    def finish(self) -> None:
        extra = len(self._data) - self._offset
        if extra:
            raise TrailingBytesError(f"Over-long {self._message}", extra)


_M = TypeVar("_M", bound="_Base64Mixin")


class _Base64Mixin(ABC):
    """Binary encoding contract plus helpers for text transports."""

    @abstractmethod
    def serialize(self) -> bytes:
        """Encode the message to bytes."""

    @classmethod
    @abstractmethod
    def deserialize(cls: type[_M], data: bytes) -> _M:
        """Decode the message from bytes."""

    def to_base64url(self) -> str:
        return to_base64url(self.serialize())

    @classmethod
    def from_base64url(cls: type[_M], s: str) -> _M:
        try:
            data = from_base64url(s)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Invalid base64url encoding: {e}") from e
        return cls.deserialize(data)


@dataclass(frozen=True)
class RegistrationRequest(_Base64Mixin):
    """Client to server: the blinded password element."""

    blinded_element: bytes

    def serialize(self) -> bytes:
        return self.blinded_element

    @classmethod
    def deserialize(cls, data: bytes) -> RegistrationRequest:
        """Decode a request.

        Raises:
            DecodeError: If the input is truncated, over-long or not a valid element.
        """
        reader = _Reader(data, "registration request")
        element = reader.read(ELEMENT_SIZE)
        reader.finish()
        return cls(blinded_element=validate_element(element, "blinded element"))


@dataclass(frozen=True)
class RegistrationResponse(_Base64Mixin):
    """Server to client: the OPRF evaluation and the server public key."""

    evaluated_element: bytes
    server_public_key: bytes

    def serialize(self) -> bytes:
        return self.evaluated_element + self.server_public_key

    @classmethod
    def deserialize(cls, data: bytes) -> RegistrationResponse:
        """Decode a response.

        Raises:
            DecodeError: If the input is truncated, over-long or has an invalid element.
        """
        reader = _Reader(data, "registration response")
        evaluated = reader.read(ELEMENT_SIZE)
        server_public_key = reader.read(ELEMENT_SIZE)
        reader.finish()
        return cls(
            evaluated_element=validate_element(evaluated, "evaluated element"),
            server_public_key=validate_element(server_public_key, "server public key"),
        )


@dataclass(frozen=True)
class RegistrationUpload(_Base64Mixin):
    """Client to server: the envelope and the client public key."""

    envelope: bytes
    client_public_key: bytes

    def serialize(self) -> bytes:
        return struct.pack("!H", len(self.envelope)) + self.envelope + self.client_public_key

    @classmethod
    def deserialize(cls, data: bytes) -> RegistrationUpload:
        """Decode an upload.

        Raises:
            DecodeError: If the input is truncated, over-long, carries a wrong
                envelope size or an invalid public key.
        """
        reader = _Reader(data, "registration upload")
        envelope_len = reader.read_u16()
        if envelope_len != ENVELOPE_SIZE:
            raise EnvelopeSizeError(
                f"Invalid envelope size: {envelope_len}, expected {ENVELOPE_SIZE}"
            )
        envelope = reader.read(envelope_len)
        client_public_key = reader.read(ELEMENT_SIZE)
        reader.finish()
        return cls(
            envelope=envelope,
            client_public_key=validate_element(client_public_key, "client public key"),
        )


@dataclass(eq=False)
class ClientRegistrationState(_Base64Mixin):
    """Private client state held by the caller between start and finish.

    Single-use: finish consumes it and wipes the blind and password copies.

    Attributes:
        blind: The blinding scalar.
        password: The password bytes.
    """

    blind: bytearray
    password: bytearray
    consumed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.blind = bytearray(self.blind)
        self.password = bytearray(self.password)

    def __repr__(self) -> str:
        return f"ClientRegistrationState(consumed={self.consumed})"

    def serialize(self) -> bytes:
        """Encode the state.

        Unlike the wire messages this is not total: a consumed state no
        longer holds its secrets and refuses to encode.

        Raises:
            StateConsumedError: If the state has already been consumed.
        """
        if self.consumed:
            raise StateConsumedError("Client registration state has already been consumed")
        return (
            struct.pack("!B", STATE_VERSION)
            + bytes(self.blind)
            + struct.pack("!I", len(self.password))
            + bytes(self.password)
        )

    @classmethod
    def deserialize(cls, data: bytes) -> ClientRegistrationState:
        """Decode a state blob.

        Raises:
            DecodeError: If the blob is truncated, over-long, of an unknown
                version, carries an invalid scalar or a password
                longer than MAX_PASSWORD_LENGTH.
        """
        reader = _Reader(data, "client registration state")
        version = reader.read_u8()
        if version != STATE_VERSION:
            raise UnsupportedVersionError(
                f"Unsupported state version: {version}, expected {STATE_VERSION}"
            )
        blind = reader.read(SCALAR_SIZE)
        password_len = reader.read_u32()
        if password_len > MAX_PASSWORD_LENGTH:
            raise DecodeError(
                f"Invalid password length: {password_len}, maximum {MAX_PASSWORD_LENGTH}"
            )
        password = reader.read(password_len)
        reader.finish()
        return cls(
            blind=bytearray(validate_scalar(blind, "blinding scalar")),
            password=bytearray(password),
        )

    def consume(self) -> bytes:
        """Mark the state used and return a copy of the password.

        Raises:
            StateConsumedError: If the state has already been consumed.
        """
        if self.consumed:
            raise StateConsumedError("Client registration state has already been consumed")
        self.consumed = True
        return bytes(self.password)

    def wipe(self) -> None:
        """Overwrite the stored blind and password bytes."""
        for secret in (self.blind, self.password):
            for i in range(len(secret)):
                secret[i] = 0
        self.blind = bytearray()
        self.password = bytearray()
