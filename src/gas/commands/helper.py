"""Credential-helper actions invoked by git, not by people.

Git runs ``gas get`` (or ``store``/``erase``) with a ``key=value`` request on
stdin, terminated by a blank line or EOF. Only ``get`` produces output;
``store`` and ``erase`` are accepted and ignored because secrets are managed
exclusively through ``gas add`` and ``gas remove``.

Nothing but protocol lines may reach stdout from here, and "no account
applies" exits 0 with empty output.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

from gas.auth.secret_store import KeyringSecretStore
from gas.broker import CredentialBroker
from gas.config import get_override_account, load_config
from gas.output import debug


def read_request(stream: TextIO) -> str:
    """Read a credential request up to the first blank line or EOF."""
    lines: list[str] = []
    for line in stream:
        if not line.strip():
            break
        lines.append(line.rstrip("\r\n"))
    return "".join(f"{line}\n" for line in lines)


def credential_get() -> None:
    """[Internal] Answer git's credential request for the current directory."""
    request = read_request(sys.stdin)
    if not request:
        return
    config = load_config()
    broker = CredentialBroker(KeyringSecretStore())
    nickname = broker.resolve_and_emit(
        config, request, os.getcwd(), get_override_account()
    )
    debug(f"Answered with account: {nickname or '(none)'}")


def credential_store() -> None:
    """[Internal] Accept git's store request without acting on it."""
    read_request(sys.stdin)


def credential_erase() -> None:
    """[Internal] Accept git's erase request without acting on it."""
    read_request(sys.stdin)
