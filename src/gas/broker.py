"""Credential broker -- accounts in, git credentials out.

The :class:`CredentialBroker` is the coordinator between the account table
(:class:`~gas.models.AppConfig`), the directory rules
(:mod:`gas.resolver`), and a :class:`~gas.auth.secret_store.SecretStore`.
It owns the two invariants that neither side enforces on its own:

* a secret exists under ``(REALM, nickname)`` exactly when ``nickname`` is
  a key of ``config.accounts``;
* ``default_account`` and path rules never point at a removed account.

The config is passed into every call and mutated in place; loading it
before and saving it after is the caller's job.

See Also:
    :func:`gas.commands.helper.credential_get` -- the ``git credential``
    entry point that feeds :meth:`CredentialBroker.resolve_and_emit`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from gas.auth.secret_store import REALM, SecretStore
from gas.exceptions import InvalidUsageError
from gas.models import AccountRecord, AppConfig, GitRequestContext
from gas.resolver import resolve

logger = logging.getLogger(__name__)


def parse_git_input(text: str) -> GitRequestContext:
    """Parse git's ``key=value`` credential request.

    Reading stops at the first blank line. Lines without ``=`` and
    unrecognised keys are ignored; values are stripped.

    Example::

        parse_git_input("protocol=https\\nhost=github.com\\n")
        # GitRequestContext(protocol="https", host="github.com", ...)
    """
    fields: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            break
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key in GitRequestContext.model_fields:
            fields[key] = value.strip()
    return GitRequestContext(**fields)


class CredentialBroker:
    """Register, remove, and answer for accounts.

    Args:
        store: Backend holding one secret per nickname under
            :data:`~gas.auth.secret_store.REALM`.

    Example::

        broker = CredentialBroker(KeyringSecretStore())
        broker.register(config, "Work", "jdoe-corp", token)
        broker.resolve_and_emit(config, "host=github.com\\n", os.getcwd())
    """

    def __init__(self, store: SecretStore, realm: str = REALM) -> None:
        self._store = store
        self._realm = realm

    def register(
        self, config: AppConfig, nickname: str, username: str, secret: str
    ) -> None:
        """Add or replace the account *nickname*.

        The secret is written first, so a failing secret store leaves
        *config* untouched. Re-registering replaces both username and
        secret. The first account registered becomes the default.

        Raises:
            InvalidUsageError: If *nickname* is empty.
            SecretStoreError: If the secret cannot be stored.
        """
        if not nickname:
            raise InvalidUsageError("Account nickname must not be empty")

        self._store.set(self._realm, nickname, secret)
        config.accounts[nickname] = AccountRecord(username=username)
        if config.default_account is None:
            config.default_account = nickname
        logger.info("Registered account '%s' (%s)", nickname, username)

    def remove(self, config: AppConfig, nickname: str) -> None:
        """Forget the account *nickname* everywhere.

        Removes the account record, every path rule naming it, the default
        if it is this account, and finally the secret. Each step tolerates
        the nickname being absent. Only a secret store failure is raised,
        after the in-memory changes have already been made.

        Raises:
            SecretStoreError: If the secret store fails to delete.
        """
        config.accounts.pop(nickname, None)
        config.path_rules = {
            path: name for path, name in config.path_rules.items() if name != nickname
        }
        if config.default_account == nickname:
            config.default_account = None
        self._store.delete(self._realm, nickname)
        logger.info("Removed account '%s'", nickname)

    def assign(self, config: AppConfig, directory: str, nickname: str) -> None:
        """Bind *directory* (and everything below it) to *nickname*.

        Raises:
            InvalidUsageError: If *nickname* is not a registered account.
        """
        if nickname not in config.accounts:
            raise InvalidUsageError(f"Account '{nickname}' is not registered")
        config.path_rules[directory] = nickname
        logger.info("Directory '%s' now uses account '%s'", directory, nickname)

    def resolve_account(
        self,
        config: AppConfig,
        current_dir: str,
        override: Optional[str] = None,
    ) -> Optional[str]:
        """Pick the nickname for *current_dir*.

        Priority: *override*, then the longest matching path rule, then
        ``config.default_account``. The result may name an account that is
        not registered.
        """
        if override:
            logger.debug("Using override account '%s'", override)
            return override
        nickname = resolve(config.path_rules, current_dir)
        if nickname is not None:
            logger.debug("Path rule for '%s' selects '%s'", current_dir, nickname)
            return nickname
        return config.default_account

    def resolve_and_emit(
        self,
        config: AppConfig,
        request_input: str,
        current_dir: str,
        override: Optional[str] = None,
        out: Optional[TextIO] = None,
    ) -> Optional[str]:
        """Answer one ``git credential get`` request.

        Writes ``username=`` and ``password=`` lines to *out* (stdout by
        default) for the resolved account. Writes nothing when no account
        resolves or the resolved nickname is not registered; git reads
        silence as "this helper has nothing".

        Returns:
            The nickname whose credentials were written, or ``None``.

        Raises:
            SecretNotFound: The account is registered but its secret is
                missing from the store.
            SecretStoreError: The secret store failed.
        """
        context = parse_git_input(request_input)
        logger.debug("Credential request for %s://%s", context.protocol, context.host)

        nickname = self.resolve_account(config, current_dir, override)
        if nickname is None:
            logger.debug("No account applies to '%s'", current_dir)
            return None

        record = config.accounts.get(nickname)
        if record is None:
            logger.debug("Account '%s' is not registered; emitting nothing", nickname)
            return None

        secret = self._store.get(self._realm, nickname)
        out = out or sys.stdout
        out.write(f"username={record.username}\n")
        out.write(f"password={secret}\n")
        out.flush()
        return nickname
