"""OPAQUE client registration.

Client side of the registration phase of the OPAQUE asymmetric PAKE over
ristretto255, SHA-512 and Argon2id. The password never leaves the client;
the server receives a blinded element and, after responding, an envelope
and client public key to store.

Example:
    ```python
    from opaque_registration import ClientRegistration, RegistrationResponse

    registration = ClientRegistration()
    started = registration.start(b"correct horse battery staple")
    request_bytes = started.message.serialize()

    # ... send request_bytes to the server, receive response_bytes ...

    response = RegistrationResponse.deserialize(response_bytes)
    finished = registration.finish(started.state, response)
    upload_bytes = finished.message.serialize()
    ```
"""

from .binding import (
    RegistrationFinishHandle,
    RegistrationStartHandle,
    client_register_finish,
    client_register_start,
    get_registration_finish_message,
    get_registration_start_message,
    get_registration_start_state,
)
from .constants import (
    DEFAULT_ARGON2_MEMORY_COST,
    DEFAULT_ARGON2_PARALLELISM,
    DEFAULT_ARGON2_TIME_COST,
    MAX_BLIND_ATTEMPTS,
)
from .errors import (
    DecodeError,
    EnvelopeSizeError,
    InvalidGroupElementError,
    InvalidScalarError,
    OpaqueError,
    ProtocolError,
    RandomSourceError,
    SlowHashError,
    StateConsumedError,
    TrailingBytesError,
    TruncatedMessageError,
    UnsupportedVersionError,
)
from .messages import (
    ClientRegistrationState,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationUpload,
)
from .registration import (
    ClientRegistration,
    ClientRegistrationFinishResult,
    ClientRegistrationStartResult,
)
from .suite import DEFAULT_CIPHER_SUITE, CipherSuite, SlowHashParameters

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "ClientRegistration",
    "ClientRegistrationStartResult",
    "ClientRegistrationFinishResult",
    # Host entry points
    "RegistrationStartHandle",
    "RegistrationFinishHandle",
    "client_register_start",
    "client_register_finish",
    "get_registration_start_message",
    "get_registration_start_state",
    "get_registration_finish_message",
    # Configuration
    "CipherSuite",
    "SlowHashParameters",
    "DEFAULT_CIPHER_SUITE",
    "DEFAULT_ARGON2_MEMORY_COST",
    "DEFAULT_ARGON2_TIME_COST",
    "DEFAULT_ARGON2_PARALLELISM",
    "MAX_BLIND_ATTEMPTS",
    # Messages
    "RegistrationRequest",
    "RegistrationResponse",
    "RegistrationUpload",
    "ClientRegistrationState",
    # Errors
    "OpaqueError",
    "RandomSourceError",
    "SlowHashError",
    "ProtocolError",
    "StateConsumedError",
    "DecodeError",
    "TruncatedMessageError",
    "TrailingBytesError",
    "InvalidGroupElementError",
    "InvalidScalarError",
    "UnsupportedVersionError",
    "EnvelopeSizeError",
    # Version
    "__version__",
]
