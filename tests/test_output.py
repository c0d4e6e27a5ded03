"""Tests for the output layer.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_table in plain and rich modes
- Rich markup escaping of user-supplied text
- Logging configuration for --verbose
- Global instance management
"""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from gas import output as output_module
from gas.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    configure_logging,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("gas.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("gas.output._is_tty", lambda: True)


@pytest.fixture()
def gas_logger():
    """Restore the ``gas`` logger after configure_logging() mutates it."""
    logger = logging.getLogger("gas")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_rich_stays_rich(self, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH)
        assert mgr.format == OutputFormat.RICH


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("username=octocat")
        captured = capfd.readouterr()
        assert captured.out == "username=octocat\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error", "suggest"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("a message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "a message" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).error("boom")
        assert capfd.readouterr().err == "Error: boom\n"


class TestQuietVerbose:
    def test_quiet_suppresses_info_success_suggest(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("i")
        mgr.success("s")
        mgr.suggest("n")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warning_and_error(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capfd.readouterr().err
        assert "careful" in err
        assert "broken" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("hidden")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("shown")
        assert capfd.readouterr().err == "[debug] shown\n"


# ------------------------------------------------------------------ #
# Tables and markup
# ------------------------------------------------------------------ #


class TestPrintTable:
    def test_plain_is_tab_separated(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["Account", "Username"], [["Work", "jdoe"], ["Home", "jd"]])
        assert capfd.readouterr().out == "Account\tUsername\nWork\tjdoe\nHome\tjd\n"

    def test_rich_renders_cells(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.RICH)
        mgr.print_table(["Account"], [["Work"]], title="Accounts")
        out = capfd.readouterr().out
        assert "Accounts" in out
        assert "Work" in out


class TestMarkupEscaping:
    def test_brackets_in_error_survive(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.error("Account '[bold]x' is not registered.")
        assert "[bold]x" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Logging
# ------------------------------------------------------------------ #


class TestConfigureLogging:
    def test_verbose_installs_rich_handler(self, gas_logger, non_tty):
        configure_logging(OutputManager(format=OutputFormat.PLAIN, verbose=True))
        assert gas_logger.level == logging.DEBUG
        assert len(gas_logger.handlers) == 1
        assert isinstance(gas_logger.handlers[0], RichHandler)
        assert gas_logger.propagate is False

    def test_default_is_silent(self, gas_logger, non_tty):
        configure_logging(OutputManager(format=OutputFormat.PLAIN))
        assert gas_logger.level == logging.WARNING
        assert len(gas_logger.handlers) == 1
        assert isinstance(gas_logger.handlers[0], logging.NullHandler)

    def test_reconfigure_replaces_handler(self, gas_logger, non_tty):
        configure_logging(OutputManager(format=OutputFormat.PLAIN, verbose=True))
        configure_logging(OutputManager(format=OutputFormat.PLAIN, verbose=True))
        assert len(gas_logger.handlers) == 1


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output(self, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        set_output(mgr)
        assert get_output() is mgr

    def test_module_functions_delegate(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("via module")
        output_module.print_data("data")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        assert "via module" in captured.err
