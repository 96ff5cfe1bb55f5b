"""Tests for wire message and client state encodings."""

from __future__ import annotations

import struct

import pytest

from opaque_registration.constants import MAX_PASSWORD_LENGTH
from opaque_registration.crypto.constants import ENVELOPE_SIZE
from opaque_registration.crypto.group import hash_to_group
from opaque_registration.errors import (
    DecodeError,
    EnvelopeSizeError,
    InvalidGroupElementError,
    InvalidScalarError,
    StateConsumedError,
    TrailingBytesError,
    TruncatedMessageError,
    UnsupportedVersionError,
)
from opaque_registration.messages import (
    ClientRegistrationState,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationUpload,
    _Base64Mixin,
)

ELEMENT_A = hash_to_group(b"a")
ELEMENT_B = hash_to_group(b"b")
SCALAR = bytes([7]) + bytes(31)


class TestRegistrationRequest:
    """Tests for RegistrationRequest encoding."""

    def test_serialize(self) -> None:
        assert RegistrationRequest(ELEMENT_A).serialize() == ELEMENT_A

    def test_deserialize(self) -> None:
        assert RegistrationRequest.deserialize(ELEMENT_A) == RegistrationRequest(ELEMENT_A)

    def test_truncated(self) -> None:
        with pytest.raises(TruncatedMessageError) as exc_info:
            RegistrationRequest.deserialize(ELEMENT_A[:-1])
        assert exc_info.value.expected == 32
        assert exc_info.value.actual == 31

    def test_trailing_bytes(self) -> None:
        with pytest.raises(TrailingBytesError) as exc_info:
            RegistrationRequest.deserialize(ELEMENT_A + b"\x00")
        assert exc_info.value.extra == 1

    def test_identity_rejected(self) -> None:
        with pytest.raises(InvalidGroupElementError):
            RegistrationRequest.deserialize(bytes(32))

    def test_base64url(self) -> None:
        request = RegistrationRequest(ELEMENT_A)
        assert RegistrationRequest.from_base64url(request.to_base64url()) == request

    def test_invalid_base64url(self) -> None:
        with pytest.raises(DecodeError, match="Invalid base64url"):
            RegistrationRequest.from_base64url("a")


class TestRegistrationResponse:
    """Tests for RegistrationResponse encoding."""

    def test_layout(self) -> None:
        response = RegistrationResponse(ELEMENT_A, ELEMENT_B)
        data = response.serialize()
        assert len(data) == 64
        assert data == ELEMENT_A + ELEMENT_B
        assert RegistrationResponse.deserialize(data) == response

    def test_truncated_by_one_byte(self) -> None:
        data = RegistrationResponse(ELEMENT_A, ELEMENT_B).serialize()
        with pytest.raises(TruncatedMessageError):
            RegistrationResponse.deserialize(data[:-1])

    def test_empty(self) -> None:
        with pytest.raises(TruncatedMessageError):
            RegistrationResponse.deserialize(b"")

    def test_trailing_bytes(self) -> None:
        data = RegistrationResponse(ELEMENT_A, ELEMENT_B).serialize()
        with pytest.raises(TrailingBytesError):
            RegistrationResponse.deserialize(data + b"\x01\x02")

    def test_invalid_evaluated_element(self) -> None:
        with pytest.raises(InvalidGroupElementError, match="evaluated element"):
            RegistrationResponse.deserialize(b"\xff" * 32 + ELEMENT_B)

    def test_invalid_server_public_key(self) -> None:
        with pytest.raises(InvalidGroupElementError, match="server public key"):
            RegistrationResponse.deserialize(ELEMENT_A + bytes(32))

    def test_errors_are_distinct_variants(self) -> None:
        """Transport corruption and suite mismatch raise different DecodeError types."""
        assert not issubclass(TruncatedMessageError, InvalidGroupElementError)
        assert not issubclass(InvalidGroupElementError, TruncatedMessageError)
        assert issubclass(TruncatedMessageError, DecodeError)
        assert issubclass(InvalidGroupElementError, DecodeError)


class TestRegistrationUpload:
    """Tests for RegistrationUpload encoding."""

    def test_layout(self) -> None:
        envelope = b"\x05" * ENVELOPE_SIZE
        upload = RegistrationUpload(envelope, ELEMENT_A)
        data = upload.serialize()
        assert data[:2] == struct.pack("!H", ENVELOPE_SIZE)
        assert data[2 : 2 + ENVELOPE_SIZE] == envelope
        assert data[2 + ENVELOPE_SIZE :] == ELEMENT_A
        assert RegistrationUpload.deserialize(data) == upload

    def test_wrong_envelope_size(self) -> None:
        data = struct.pack("!H", 10) + b"\x00" * 10 + ELEMENT_A
        with pytest.raises(EnvelopeSizeError):
            RegistrationUpload.deserialize(data)

    def test_truncated(self) -> None:
        data = RegistrationUpload(b"\x05" * ENVELOPE_SIZE, ELEMENT_A).serialize()
        with pytest.raises(TruncatedMessageError):
            RegistrationUpload.deserialize(data[:-1])

    def test_trailing_bytes(self) -> None:
        data = RegistrationUpload(b"\x05" * ENVELOPE_SIZE, ELEMENT_A).serialize()
        with pytest.raises(TrailingBytesError):
            RegistrationUpload.deserialize(data + b"\x00")


class TestClientRegistrationState:
    """Tests for ClientRegistrationState encoding and lifecycle."""

    def test_layout(self) -> None:
        state = ClientRegistrationState(blind=SCALAR, password=bytearray(b"pw"))
        data = state.serialize()
        assert data == b"\x01" + SCALAR + b"\x00\x00\x00\x02" + b"pw"

    def test_deserialize(self) -> None:
        data = ClientRegistrationState(blind=SCALAR, password=bytearray(b"pw")).serialize()
        state = ClientRegistrationState.deserialize(data)
        assert state.blind == SCALAR
        assert bytes(state.password) == b"pw"
        assert state.consumed is False

    def test_empty_password(self) -> None:
        data = ClientRegistrationState(blind=SCALAR, password=bytearray()).serialize()
        assert len(data) == 1 + 32 + 4
        assert bytes(ClientRegistrationState.deserialize(data).password) == b""

    def test_unknown_version(self) -> None:
        data = b"\x02" + SCALAR + b"\x00\x00\x00\x00"
        with pytest.raises(UnsupportedVersionError):
            ClientRegistrationState.deserialize(data)

    def test_password_length_beyond_input(self) -> None:
        data = b"\x01" + SCALAR + b"\x00\x00\x00\x05" + b"pw"
        with pytest.raises(TruncatedMessageError):
            ClientRegistrationState.deserialize(data)

    def test_trailing_bytes(self) -> None:
        data = b"\x01" + SCALAR + b"\x00\x00\x00\x02" + b"pwx"
        with pytest.raises(TrailingBytesError):
            ClientRegistrationState.deserialize(data)

    def test_zero_blind_rejected(self) -> None:
        data = b"\x01" + bytes(32) + b"\x00\x00\x00\x00"
        with pytest.raises(InvalidScalarError):
            ClientRegistrationState.deserialize(data)

    def test_repr_hides_secrets(self) -> None:
        state = ClientRegistrationState(blind=SCALAR, password=bytearray(b"secret"))
        assert "secret" not in repr(state)
        assert SCALAR.hex() not in repr(state)

    def test_consume_once(self) -> None:
        state = ClientRegistrationState(blind=SCALAR, password=bytearray(b"pw"))
        assert state.consume() == b"pw"
        with pytest.raises(StateConsumedError):
            state.consume()
        with pytest.raises(StateConsumedError):
            state.serialize()

    def test_wipe(self) -> None:
        """Wiping zeroes both the blind and the password in place."""
        state = ClientRegistrationState(blind=SCALAR, password=bytearray(b"pw"))
        stored_blind = state.blind
        stored_password = state.password
        state.wipe()
        assert stored_blind == bytearray(32)
        assert stored_password == bytearray(2)
        assert state.blind == bytearray()
        assert state.password == bytearray()

    def test_password_length_over_limit(self) -> None:
        data = b"\x01" + SCALAR + struct.pack("!I", MAX_PASSWORD_LENGTH + 1)
        with pytest.raises(DecodeError, match="Invalid password length"):
            ClientRegistrationState.deserialize(data + b"a" * (MAX_PASSWORD_LENGTH + 1))

    def test_base64url_round_trip(self) -> None:
        state = ClientRegistrationState(blind=SCALAR, password=bytearray(b"pw"))
        restored = ClientRegistrationState.from_base64url(state.to_base64url())
        assert restored.serialize() == state.serialize()


class TestBase64Helpers:
    """Tests for the shared base64url contract."""

    def test_mixin_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            _Base64Mixin()  # type: ignore[abstract]

    @pytest.mark.parametrize("text", ["abc+def", "abc/def", "abcd=", "ab cd", "abc!def"])
    def test_rejects_non_base64url_characters(self, text: str) -> None:
        with pytest.raises(DecodeError, match="Invalid base64url"):
            RegistrationRequest.from_base64url(text)

    def test_rejects_non_str(self) -> None:
        with pytest.raises(DecodeError, match="Expected str"):
            RegistrationRequest.from_base64url(ELEMENT_A)  # type: ignore[arg-type]
