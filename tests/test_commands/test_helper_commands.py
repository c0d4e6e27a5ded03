"""CLI tests for the credential-helper actions git invokes (get, store, erase)."""

from __future__ import annotations

import io
import os

import pytest

from gas.app import app
from gas.auth.secret_store import REALM, MemorySecretStore
from gas.commands.helper import read_request
from gas.config import save_config
from gas.exceptions import SecretNotFound
from gas.models import AccountRecord, AppConfig

REQUEST = "protocol=https\nhost=github.com\n\n"


@pytest.fixture
def bound_here(
    isolated_config, two_accounts: AppConfig, patched_store: MemorySecretStore
) -> AppConfig:
    """Work is bound to the current directory; Home is the default."""
    two_accounts.path_rules[os.getcwd()] = "Work"
    save_config(two_accounts)
    patched_store.set(REALM, "Work", "work-pass")
    patched_store.set(REALM, "Home", "home-pass")
    return two_accounts


class TestReadRequest:
    def test_stops_at_blank_line(self) -> None:
        stream = io.StringIO("protocol=https\nhost=github.com\n\nignored=1\n")
        assert read_request(stream) == "protocol=https\nhost=github.com\n"

    def test_eof_without_blank_line(self) -> None:
        assert read_request(io.StringIO("host=github.com")) == "host=github.com\n"

    def test_crlf(self) -> None:
        assert read_request(io.StringIO("host=github.com\r\n\r\n")) == "host=github.com\n"

    def test_empty(self) -> None:
        assert read_request(io.StringIO("")) == ""


class TestGet:
    def test_path_rule(self, cli_runner, bound_here: AppConfig) -> None:
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert result.exit_code == 0, result.output
        assert result.stdout == "username=work-user\npassword=work-pass\n"

    def test_subdirectory_inherits_rule(
        self, cli_runner, bound_here: AppConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        sub = os.path.join(os.getcwd(), "repo", "src")
        os.makedirs(sub)
        monkeypatch.chdir(sub)
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert result.stdout == "username=work-user\npassword=work-pass\n"

    def test_default_account(
        self, cli_runner, bound_here: AppConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(os.path.dirname(os.getcwd()))
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert result.stdout == "username=home-user\npassword=home-pass\n"

    def test_override_env(self, cli_runner, bound_here: AppConfig) -> None:
        result = cli_runner.invoke(
            app, ["get"], input=REQUEST, env={"GAS_ACCOUNT_OVERRIDE": "Home"}
        )
        assert result.stdout == "username=home-user\npassword=home-pass\n"

    def test_override_unknown_account_is_silent(self, cli_runner, bound_here: AppConfig) -> None:
        result = cli_runner.invoke(
            app, ["get"], input=REQUEST, env={"GAS_ACCOUNT_OVERRIDE": "Ghost"}
        )
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_nothing_configured_is_silent(self, cli_runner, isolated_config, patched_store) -> None:
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_never_prompts_for_language(self, cli_runner, isolated_config, patched_store) -> None:
        save_config(AppConfig(default_account="A", accounts={"A": AccountRecord(username="a")}))
        patched_store.set(REALM, "A", "secret")
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert result.stdout == "username=a\npassword=secret\n"

    def test_empty_request(self, cli_runner, bound_here: AppConfig) -> None:
        result = cli_runner.invoke(app, ["get"], input="")
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_missing_secret(
        self, cli_runner, bound_here: AppConfig, patched_store: MemorySecretStore
    ) -> None:
        patched_store.delete(REALM, "Work")
        result = cli_runner.invoke(app, ["get"], input=REQUEST)
        assert isinstance(result.exception, SecretNotFound)
        assert "password=" not in result.stdout


class TestStoreErase:
    @pytest.mark.parametrize("action", ["store", "erase"])
    def test_accepted_and_ignored(
        self, cli_runner, bound_here: AppConfig, patched_store: MemorySecretStore, action: str
    ) -> None:
        result = cli_runner.invoke(
            app, [action], input="protocol=https\nhost=github.com\nusername=x\npassword=y\n\n"
        )
        assert result.exit_code == 0
        assert result.stdout == ""
        assert patched_store.get(REALM, "Work") == "work-pass"
        assert len(patched_store) == 2

    def test_hidden_from_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("setup", "add", "remove", "use", "list", "with", "lang"):
            assert name in result.output
        assert " get " not in result.output
