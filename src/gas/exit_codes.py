"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~gas.exceptions.GasError` subclass. Shell wrappers can
inspect the exit code to determine the failure class without parsing stderr.

Note that git treats any non-zero exit of ``gas get`` as a helper failure, so
"no account applies" is reported with :data:`EXIT_SUCCESS` and empty output.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unknown account."""

EXIT_AUTH_FAILURE = 3
"""The device flow ended without a token (denied, expired, timed out)."""

EXIT_SECRET_NOT_FOUND = 4
"""A registered account has no secret in the secret store."""

EXIT_SECRET_STORE_ERROR = 5
"""The secret store backend failed."""

EXIT_CONNECTION_ERROR = 6
"""The identity provider was unreachable or answered with a non-success status."""

EXIT_PROTOCOL_ERROR = 7
"""The identity provider's response did not match the expected schema."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
