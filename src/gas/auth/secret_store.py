"""Secret storage keyed by ``(realm, nickname)``.

The broker only ever talks to the :class:`SecretStore` protocol, so it never
knows which backend holds the secrets. Two implementations ship:

* :class:`KeyringSecretStore` -- the OS credential store through the
  ``keyring`` library (macOS Keychain, Secret Service / KWallet on Linux,
  Windows Credential Locker).
* :class:`MemorySecretStore` -- a dict, for tests and dry runs.

All secrets written by gas share one namespace, :data:`REALM`. Deletion is
idempotent in every backend: deleting an absent entry is not an error.
"""

from __future__ import annotations

import logging
from typing import Protocol

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from gas.exceptions import SecretNotFound, SecretStoreError

logger = logging.getLogger(__name__)

REALM = "gas"
"""Service name under which every gas secret is stored."""


class SecretStore(Protocol):
    """Capability for storing one secret per ``(realm, key)``."""

    def set(self, realm: str, key: str, secret: str) -> None:
        """Create or overwrite the secret for ``(realm, key)``.

        Raises:
            SecretStoreError: If the backend rejects the write.
        """
        ...

    def get(self, realm: str, key: str) -> str:
        """Return the secret for ``(realm, key)``.

        Raises:
            SecretNotFound: If no secret is stored.
            SecretStoreError: If the backend fails.
        """
        ...

    def delete(self, realm: str, key: str) -> None:
        """Remove the secret for ``(realm, key)`` if present.

        Raises:
            SecretStoreError: If the backend fails for a reason other than
                the entry being absent.
        """
        ...


class KeyringSecretStore:
    """Secrets in the operating system's credential manager.

    Example::

        store = KeyringSecretStore()
        store.set(REALM, "Work", "ghp_abc123")
        store.get(REALM, "Work")
        store.delete(REALM, "Work")
    """

    def set(self, realm: str, key: str, secret: str) -> None:
        try:
            keyring.set_password(realm, key, secret)
        except KeyringError as exc:
            raise SecretStoreError(
                f"Failed to save secret for '{key}' to keyring: {exc}"
            ) from exc
        logger.debug("Stored secret in keyring: %s/%s", realm, key)

    def get(self, realm: str, key: str) -> str:
        try:
            secret = keyring.get_password(realm, key)
        except KeyringError as exc:
            raise SecretStoreError(
                f"Failed to read secret for '{key}' from keyring: {exc}"
            ) from exc
        if secret is None:
            raise SecretNotFound(f"No secret stored for '{key}' in keyring")
        return secret

    def delete(self, realm: str, key: str) -> None:
        try:
            keyring.delete_password(realm, key)
        except PasswordDeleteError:
            logger.debug("No keyring entry to delete for %s/%s", realm, key)
            return
        except KeyringError as exc:
            raise SecretStoreError(
                f"Failed to delete secret for '{key}' from keyring: {exc}"
            ) from exc
        logger.debug("Deleted secret from keyring: %s/%s", realm, key)


class MemorySecretStore:
    """Secrets in a process-local dict."""

    def __init__(self) -> None:
        self._secrets: dict[tuple[str, str], str] = {}

    def set(self, realm: str, key: str, secret: str) -> None:
        self._secrets[(realm, key)] = secret

    def get(self, realm: str, key: str) -> str:
        try:
            return self._secrets[(realm, key)]
        except KeyError:
            raise SecretNotFound(f"No secret stored for '{key}'") from None

    def delete(self, realm: str, key: str) -> None:
        self._secrets.pop((realm, key), None)

    def __contains__(self, item: tuple[str, str]) -> bool:
        return item in self._secrets

    def __len__(self) -> int:
        return len(self._secrets)
