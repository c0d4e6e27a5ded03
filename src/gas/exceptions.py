"""Exception hierarchy for gas.

All exceptions inherit from :class:`GasError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gas.exit_codes`.
The top-level error handler in :func:`gas.app.main` catches ``GasError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`~gas.exit_codes.EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    GasError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- ConfigurationError   (exit 1)
    +-- AuthError            (exit 3)
    |   +-- AuthDenied
    |   +-- AuthExpired
    |   +-- AuthTimedOut
    +-- SecretStoreError     (exit 5)
    |   +-- SecretNotFound   (exit 4)
    +-- TransportError       (exit 6)
    +-- ProtocolError        (exit 7)

Messages never include secret values.
"""

from gas.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PROTOCOL_ERROR,
    EXIT_SECRET_NOT_FOUND,
    EXIT_SECRET_STORE_ERROR,
)


class GasError(Exception):
    """Base exception for all gas errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`gas.exit_codes`. The entry point catches this
    exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(GasError):
    """Raised for invalid CLI arguments or references to unregistered accounts."""

    exit_code = EXIT_INVALID_USAGE


class ConfigurationError(GasError):
    """Raised for a missing/placeholder OAuth client id or an unreadable config file."""

    exit_code = EXIT_GENERIC_FAILURE


class AuthError(GasError):
    """Base class for terminal device-flow outcomes other than success."""

    exit_code = EXIT_AUTH_FAILURE


class AuthDenied(AuthError):
    """The provider answered the token poll with an unrecoverable error code."""


class AuthExpired(AuthError):
    """The device code expired before the user approved it."""


class AuthTimedOut(AuthError):
    """The poll loop exhausted its attempts without an answer."""


class SecretStoreError(GasError):
    """Raised when the secret store backend fails to read, write, or delete."""

    exit_code = EXIT_SECRET_STORE_ERROR


class SecretNotFound(SecretStoreError):
    """Raised when the secret store has no entry for the requested key.

    For a registered account this means the account table and the secret
    store have drifted apart.
    """

    exit_code = EXIT_SECRET_NOT_FOUND


class TransportError(GasError):
    """Raised on network failures or non-success HTTP statuses from the provider.

    Attributes:
        status_code: The HTTP status, or ``None`` when no response arrived.
    """

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(GasError):
    """Raised when a provider response body does not match the expected schema."""

    exit_code = EXIT_PROTOCOL_ERROR
