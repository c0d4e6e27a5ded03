"""Shared test fixtures for gas.

Provides isolated config directories, an in-memory secret store, output
state management, and a CLI runner. These fixtures are discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gas.auth.secret_store import MemorySecretStore
from gas.config import load_config, save_config
from gas.models import AccountRecord, AppConfig, Language
from gas.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner redirects those streams and the test
    finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, clears all GAS_*
    environment variables, and changes the working directory to a fresh
    ``work`` directory under tmp_path.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("gas.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["GAS_ACCOUNT_OVERRIDE", "GAS_CONFIG", "GAS_CLIENT_ID"]:
        monkeypatch.delenv(var, raising=False)

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return tmp_path


@pytest.fixture
def english_config(isolated_config: Path) -> AppConfig:
    """Persist an empty config with the language already chosen."""
    config = AppConfig(language=Language.EN)
    save_config(config)
    return load_config()


# ---------------------------------------------------------------------------
# Secret store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store() -> MemorySecretStore:
    return MemorySecretStore()


@pytest.fixture
def patched_store(
    memory_store: MemorySecretStore, monkeypatch: pytest.MonkeyPatch
) -> MemorySecretStore:
    """Make every command use *memory_store* instead of the OS keyring."""
    monkeypatch.setattr("gas.commands.accounts.KeyringSecretStore", lambda: memory_store)
    monkeypatch.setattr("gas.commands.helper.KeyringSecretStore", lambda: memory_store)
    return memory_store


@pytest.fixture
def two_accounts() -> AppConfig:
    """A config with Work and Home accounts and one path rule."""
    return AppConfig(
        language=Language.EN,
        default_account="Home",
        accounts={
            "Work": AccountRecord(username="work-user"),
            "Home": AccountRecord(username="home-user"),
        },
        path_rules={"/projects/work": "Work"},
    )


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
