"""Client registration state machine.

Registration is two calls: ``ClientRegistration.start`` blinds the password
and returns the request plus private state; ``ClientRegistration.finish``
consumes that state together with the server response and produces the
upload. The only randomness is the blinding scalar drawn in ``start``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import MAX_BLIND_ATTEMPTS, MAX_PASSWORD_LENGTH
from .crypto import oprf
from .crypto.keypair import (
    derive_envelope_keys,
    derive_keypair,
    randomize_password,
    seal_envelope,
)
from .crypto.random import RandomSource
from .errors import ProtocolError
from .messages import (
    ClientRegistrationState,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationUpload,
)
from .suite import DEFAULT_CIPHER_SUITE, CipherSuite

logger = logging.getLogger("opaque_registration")


@dataclass(frozen=True)
class ClientRegistrationStartResult:
    """Result of starting a registration.

    Attributes:
        message: The request to send to the server.
        state: The private state to hand back to finish.
    """

    message: RegistrationRequest
    state: ClientRegistrationState


@dataclass(frozen=True)
class ClientRegistrationFinishResult:
    """Result of finishing a registration.

    Attributes:
        message: The upload to send to the server.
        export_key: Application key derived from the password, never sent to the server.
    """

    message: RegistrationUpload
    export_key: bytes


class ClientRegistration:
    """Client registration bound to a cipher suite.

    Example:
        ```python
        registration = ClientRegistration()
        started = registration.start(b"password")
        # send started.message.serialize() to the server, receive response bytes
        finished = registration.finish(started.state, RegistrationResponse.deserialize(data))
        upload = finished.message.serialize()
        ```
    """

    def __init__(self, suite: CipherSuite = DEFAULT_CIPHER_SUITE) -> None:
        self._suite = suite

    @property
    def suite(self) -> CipherSuite:
        return self._suite

    def start(
        self, password: bytes, rng: RandomSource | None = None
    ) -> ClientRegistrationStartResult:
        """Blind the password and produce the registration request.

        Args:
            password: The password bytes; may be empty, at most
                MAX_PASSWORD_LENGTH bytes.
            rng: Random source override. Production callers leave this None
                to use the OS CSPRNG.

        Returns:
            The request message and the private client state.

        Raises:
            RandomSourceError: If the random source fails.
            ProtocolError: If no usable blind was found or the password is too long.
        """
        password = bytes(password)
        if len(password) > MAX_PASSWORD_LENGTH:
            raise ProtocolError(
                f"Password too long: {len(password)} bytes, maximum {MAX_PASSWORD_LENGTH}"
            )
        blinded = oprf.blind(password, rng, MAX_BLIND_ATTEMPTS)
        logger.debug("Registration started with %s", self._suite.identifier)
        return ClientRegistrationStartResult(
            message=RegistrationRequest(blinded_element=blinded.blinded_element),
            state=ClientRegistrationState(
                blind=bytearray(blinded.blind), password=bytearray(password)
            ),
        )

    def finish(
        self, state: ClientRegistrationState, response: RegistrationResponse
    ) -> ClientRegistrationFinishResult:
        """Consume the client state and server response, producing the upload.

        Args:
            state: The state returned by start; consumed by this call.
            response: The decoded server response.

        Returns:
            The upload message and the export key.

        Raises:
            StateConsumedError: If state was already consumed.
            ProtocolError: If the server evaluation cannot be unblinded.
            SlowHashError: If password stretching fails.
        """
        password = state.consume()
        try:
            blind = bytes(state.blind)
            oprf_output = oprf.finalize(password, blind, response.evaluated_element)
            stretched = self._suite.slow_hash.hash(oprf_output)
            keys = derive_envelope_keys(randomize_password(oprf_output, stretched))
            client_keypair = derive_keypair(keys.seed)
            envelope = seal_envelope(
                keys, response.server_public_key, client_keypair.public_key
            )
        finally:
            state.wipe()
        logger.debug("Registration finished, envelope of %d bytes", len(envelope))
        return ClientRegistrationFinishResult(
            message=RegistrationUpload(
                envelope=envelope, client_public_key=client_keypair.public_key
            ),
            export_key=keys.export_key,
        )
