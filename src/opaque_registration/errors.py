"""Error hierarchy for the OPAQUE registration engine."""

from __future__ import annotations


class OpaqueError(Exception):
    """Base exception for all OPAQUE registration errors."""

    pass


class RandomSourceError(OpaqueError):
    """The secure random source is unavailable or returned bad output."""

    pass


class SlowHashError(OpaqueError):
    """The password stretching function rejected its parameters or failed.

    This is a fatal configuration error and is never retried.
    """

    pass


class ProtocolError(OpaqueError):
    """A protocol-level check failed.

    Raised on caller misuse (e.g. reusing a consumed state) or when a peer
    message fails validation beyond simple decoding.
    """

    pass


class StateConsumedError(ProtocolError):
    """A client registration state was passed to finish more than once."""

    pass


class DecodeError(OpaqueError):
    """Malformed message bytes."""

    pass


class TruncatedMessageError(DecodeError):
    """Input ended before all expected fields were read.

    Attributes:
        expected: Number of bytes the decoder needed.
        actual: Number of bytes that were available.
    """

    def __init__(self, message: str, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message}: expected {expected} bytes, got {actual}")


class TrailingBytesError(DecodeError):
    """Input carried bytes past the end of the message.

    Attributes:
        extra: Number of unexpected trailing bytes.
    """

    def __init__(self, message: str, extra: int) -> None:
        self.extra = extra
        super().__init__(f"{message}: {extra} trailing bytes")


class InvalidGroupElementError(DecodeError):
    """Bytes do not encode a valid, non-identity group element.

    Usually means the peer runs a different cipher suite.
    """

    pass


class InvalidScalarError(DecodeError):
    """Bytes do not encode a canonical, non-zero scalar."""

    pass


class UnsupportedVersionError(DecodeError):
    """Serialized state carries an unknown format version."""

    pass


class EnvelopeSizeError(DecodeError):
    """Envelope length field does not match the cipher suite envelope size."""

    pass
