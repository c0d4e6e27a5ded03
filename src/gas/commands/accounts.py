"""Account commands -- the part of gas people type.

Typical workflow::

    gas setup            # once per machine
    gas add Work         # browser login, or --method token
    gas use Work         # bind the current directory
    gas list
    gas with Personal -- git push

Every command loads the config, mutates it through a
:class:`~gas.broker.CredentialBroker`, and saves it before returning.
"""

from __future__ import annotations

import os
import subprocess
import webbrowser
from typing import List, Optional

import typer

from gas.auth.device_flow import CLIENT_ID, DeviceFlowAuthenticator
from gas.auth.secret_store import REALM, KeyringSecretStore, SecretStore
from gas.broker import CredentialBroker
from gas.commands import choose, ensure_language
from gas.config import ENV_OVERRIDE, get_client_id, load_config, save_config
from gas.exceptions import (
    AuthError,
    ConfigurationError,
    GasError,
    InvalidUsageError,
    SecretNotFound,
)
from gas.git_setup import setup_git_config
from gas.i18n import Msg, t
from gas.models import DeviceFlowSession, Language
from gas.output import error, info, print_table, success, suggest, warning
from gas.resolver import rules_for

_METHODS = ("browser", "token")


def _broker() -> CredentialBroker:
    return CredentialBroker(KeyringSecretStore())


def setup_command() -> None:
    """Register gas as git's global credential helper."""
    config = load_config()
    lang = ensure_language(config)
    setup_git_config()
    success(t(lang, Msg.SETUP_COMPLETE))
    suggest(t(lang, Msg.SETUP_HINT))


def add_command(
    nickname: Optional[str] = typer.Argument(
        None, help="Account nickname, e.g. 'Work'."
    ),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="How to obtain the token: browser or token."
    ),
) -> None:
    """Register an account (browser device flow or pasted token).

    Example::

        gas add Work
        gas add Personal --method token
    """
    config = load_config()
    lang = ensure_language(config)

    if not nickname:
        nickname = typer.prompt(t(lang, Msg.ENTER_NICKNAME), err=True)

    if method is None:
        idx = choose(
            t(lang, Msg.SELECT_AUTH_METHOD),
            [t(lang, Msg.AUTH_METHOD_BROWSER), t(lang, Msg.AUTH_METHOD_TOKEN)],
            lang,
        )
        method = _METHODS[idx]

    if method == "browser":
        username, secret = _device_login(lang)
    elif method == "token":
        username = typer.prompt(t(lang, Msg.ENTER_USERNAME), err=True)
        secret = typer.prompt(t(lang, Msg.ENTER_TOKEN), hide_input=True, err=True)
    else:
        raise InvalidUsageError(
            f"Unknown method '{method}': must be one of {', '.join(_METHODS)}"
        )

    store = KeyringSecretStore()
    previous = _stored_secret(store, nickname) if nickname in config.accounts else None
    CredentialBroker(store).register(config, nickname, username, secret)
    try:
        save_config(config)
    except OSError as exc:
        # Put the secret store back in step with the config still on disk.
        if previous is None:
            store.delete(REALM, nickname)
        else:
            store.set(REALM, nickname, previous)
        raise ConfigurationError(f"Failed to save config: {exc}") from exc
    success(t(lang, Msg.ACCOUNT_REGISTERED, nickname=nickname))


def _stored_secret(store: SecretStore, nickname: str) -> Optional[str]:
    try:
        return store.get(REALM, nickname)
    except SecretNotFound:
        return None


def _device_login(lang: Language) -> tuple[str, str]:
    """Run the device flow interactively and return ``(username, token)``."""

    def show_code(session: DeviceFlowSession) -> None:
        info(t(lang, Msg.DEVICE_CODE_INFO, code=session.user_code))
        typer.prompt("", default="", show_default=False, prompt_suffix="", err=True)
        info(session.verification_uri)
        webbrowser.open(session.verification_uri)
        info(t(lang, Msg.WAITING_FOR_AUTH))

    authenticator = DeviceFlowAuthenticator(client_id=get_client_id(CLIENT_ID))
    try:
        username, token = authenticator.authenticate(show_code)
    except AuthError:
        error(t(lang, Msg.AUTH_FAILED))
        raise
    success(t(lang, Msg.AUTH_SUCCESS, username=username))
    return username, token


def remove_command(
    nickname: Optional[str] = typer.Argument(None, help="Account to remove."),
) -> None:
    """Remove an account, its directory rules, and its stored secret."""
    config = load_config()
    lang = ensure_language(config)

    if not nickname:
        accounts = sorted(config.accounts)
        if not accounts:
            info(t(lang, Msg.NO_ACCOUNTS))
            return
        nickname = accounts[choose(t(lang, Msg.SELECT_ACCOUNT_TO_REMOVE), accounts, lang)]
    elif nickname not in config.accounts:
        warning(t(lang, Msg.ACCOUNT_NOT_FOUND, nickname=nickname))

    registered = nickname in config.accounts
    # Unknown names still get their rules and secret cleared.
    _broker().remove(config, nickname)
    save_config(config)
    if registered:
        success(t(lang, Msg.ACCOUNT_REMOVED, nickname=nickname))


def use_command(
    nickname: Optional[str] = typer.Argument(
        None, help="Account to use in the current directory."
    ),
) -> None:
    """Use an account for the current directory and everything below it."""
    config = load_config()
    lang = ensure_language(config)
    if not config.accounts:
        info(t(lang, Msg.NO_ACCOUNTS))
        return

    current_dir = os.getcwd()
    if not nickname:
        accounts = sorted(config.accounts)
        nickname = accounts[
            choose(t(lang, Msg.SELECT_ACCOUNT, directory=current_dir), accounts, lang)
        ]

    _broker().assign(config, current_dir, nickname)
    save_config(config)
    success(t(lang, Msg.RULE_SAVED, directory=current_dir, nickname=nickname))


def list_command() -> None:
    """List registered accounts with their directory rules."""
    config = load_config()
    if not config.accounts:
        info(t(config.language, Msg.NO_ACCOUNTS))
        return

    rows: list[list[str]] = []
    for name in sorted(config.accounts):
        rows.append([
            name,
            config.accounts[name].username,
            "*" if config.default_account == name else "",
            ", ".join(rules_for(config.path_rules, name)),
        ])
    print_table(["Account", "Username", "Default", "Directories"], rows, title="Accounts")


def with_command(
    account: str = typer.Argument(help="Account to use for the command."),
    cmd: Optional[List[str]] = typer.Argument(None, help="Command to run."),
) -> None:
    """Run a command with an account forced, regardless of directory.

    Example::

        gas with Personal -- git push origin main
    """
    config = load_config()
    lang = ensure_language(config)

    if not cmd:
        raise InvalidUsageError(t(lang, Msg.NO_COMMAND))
    if account not in config.accounts:
        raise InvalidUsageError(t(lang, Msg.ACCOUNT_NOT_FOUND, nickname=account))

    info(t(lang, Msg.OVERRIDE_ACTIVE, nickname=account))
    env = {**os.environ, ENV_OVERRIDE: account}
    try:
        result = subprocess.run(cmd, env=env, check=False)
    except OSError as exc:
        raise GasError(f"Failed to execute command: {exc}") from exc
    raise typer.Exit(code=result.returncode)


def lang_command() -> None:
    """Change the message language."""
    config = load_config()
    config.language = None
    lang = ensure_language(config)
    success(t(lang, Msg.LANGUAGE_CHANGED))
