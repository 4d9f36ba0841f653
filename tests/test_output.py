"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- print_list in all three modes
- print_structured in all three modes
- Output file redirection
- Global instance management
- Convenience functions
"""

from __future__ import annotations

import json

import pytest

from schemer import output as output_module
from schemer.models import ListResult, NodeKind
from schemer.output import (
    OutputFormat,
    OutputManager,
    _flatten,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("schemer.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("schemer.output._is_tty", lambda: True)


@pytest.fixture()
def operations() -> ListResult:
    return ListResult(kind=NodeKind.OPERATION, entries=["listPets", "createPets"])


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        assert mgr.format == OutputFormat.JSON

    def test_explicit_rich_stays_rich(self, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH)
        assert mgr.format == OutputFormat.RICH


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

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

    def test_no_color_flag_overrides(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Test that data goes to stdout and diagnostics go to stderr."""

    def test_print_list_goes_to_stdout(self, capfd, non_tty, operations):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_list(operations)
        captured = capfd.readouterr()
        assert "listPets" in captured.out
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "error", "warning", "success", "suggest"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("something happened")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "something happened" in captured.err

    def test_error_keeps_square_brackets(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.error("Expected a mapping, found [1, 2]")
        captured = capfd.readouterr()
        assert "[1, 2]" in captured.err


# ------------------------------------------------------------------ #
# Quiet mode
# ------------------------------------------------------------------ #


class TestQuietMode:
    """Test that --quiet suppresses only non-essential diagnostics."""

    @pytest.mark.parametrize("method", ["info", "success", "suggest"])
    def test_quiet_suppresses(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        getattr(mgr, method)("hidden")
        assert capfd.readouterr().err == ""

    @pytest.mark.parametrize("method", ["warning", "error"])
    def test_quiet_does_not_suppress(self, capfd, non_tty, method):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        getattr(mgr, method)("shown")
        assert "shown" in capfd.readouterr().err

    def test_quiet_does_not_suppress_stdout_data(self, capfd, non_tty, operations):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.print_list(operations)
        assert "createPets" in capfd.readouterr().out


# ------------------------------------------------------------------ #
# Verbose mode
# ------------------------------------------------------------------ #


class TestVerboseMode:
    """Test that debug output appears only with --verbose."""

    def test_debug_hidden_by_default(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.debug("secret")
        assert capfd.readouterr().err == ""

    def test_debug_prefix_in_no_color(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("loaded 3 documents")
        assert capfd.readouterr().err == "[debug] loaded 3 documents\n"

    def test_verbose_property(self, non_tty):
        assert OutputManager(verbose=True).is_verbose is True
        assert OutputManager().is_verbose is False


# ------------------------------------------------------------------ #
# print_list
# ------------------------------------------------------------------ #


class TestPrintList:
    """Test print_list in all three output modes."""

    def test_plain_is_one_name_per_line(self, capfd, non_tty, operations):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_list(operations)
        assert capfd.readouterr().out == "listPets\ncreatePets\n"

    def test_plain_empty_prints_nothing(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_list(ListResult(kind=NodeKind.SCHEMA))
        assert capfd.readouterr().out == ""

    def test_json_is_an_array(self, capfd, non_tty, operations):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_list(operations)
        assert json.loads(capfd.readouterr().out) == ["listPets", "createPets"]

    def test_json_empty_is_empty_array(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_list(ListResult(kind=NodeKind.PATH))
        assert json.loads(capfd.readouterr().out) == []

    def test_json_keeps_non_ascii(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_list(ListResult(kind=NodeKind.PATH, entries=["/café"]))
        assert "/café" in capfd.readouterr().out

    def test_rich_table_has_title_and_rows(self, capfd, non_tty, operations):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_list(operations)
        out = capfd.readouterr().out
        assert "Operations (2)" in out
        assert "listPets" in out
        assert "createPets" in out


# ------------------------------------------------------------------ #
# print_structured
# ------------------------------------------------------------------ #


class TestPrintStructured:
    """Test printing nested dicts such as the effective config."""

    DATA = {"output": {"format": "auto"}, "discovery": {"recursive": True, "timeout": 30}}

    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_structured(self.DATA)
        assert json.loads(capfd.readouterr().out) == self.DATA

    def test_plain_is_flattened(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_structured(self.DATA)
        assert capfd.readouterr().out.splitlines() == [
            "output.format\tauto",
            "discovery.recursive\tTrue",
            "discovery.timeout\t30",
        ]

    def test_rich_contains_keys(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_structured(self.DATA)
        assert "discovery" in capfd.readouterr().out

    def test_flatten(self):
        assert _flatten({"a": {"b": {"c": 1}}, "d": 2}) == [("a.b.c", 1), ("d", 2)]


# ------------------------------------------------------------------ #
# Output file redirection
# ------------------------------------------------------------------ #


class TestOutputFile:
    """Test -o / --output file redirection."""

    def test_plain_list_writes_to_file(self, tmp_path, capfd, non_tty, operations):
        outfile = tmp_path / "out.txt"
        mgr = OutputManager(format=OutputFormat.PLAIN, output_file=str(outfile))
        mgr.print_list(operations)
        assert capfd.readouterr().out == ""
        assert outfile.read_text() == "listPets\ncreatePets\n"

    def test_json_list_writes_to_file(self, tmp_path, capfd, non_tty, operations):
        outfile = tmp_path / "out.json"
        mgr = OutputManager(format=OutputFormat.JSON, output_file=str(outfile))
        mgr.print_list(operations)
        assert capfd.readouterr().out == ""
        assert json.loads(outfile.read_text()) == ["listPets", "createPets"]

    def test_rich_mode_writes_plain_text_to_file(self, tmp_path, non_tty, operations):
        outfile = tmp_path / "out.txt"
        mgr = OutputManager(format=OutputFormat.RICH, output_file=str(outfile))
        mgr.print_list(operations)
        assert outfile.read_text() == "listPets\ncreatePets\n"

    def test_empty_list_truncates_file(self, tmp_path, non_tty):
        outfile = tmp_path / "out.txt"
        outfile.write_text("stale\n")
        mgr = OutputManager(format=OutputFormat.PLAIN, output_file=str(outfile))
        mgr.print_list(ListResult(kind=NodeKind.PATH))
        assert outfile.read_text() == "\n"


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    """Test get_output / set_output / reset_output."""

    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_output_overrides(self):
        custom = OutputManager(format=OutputFormat.JSON, no_color=True)
        set_output(custom)
        assert get_output() is custom

    def test_set_then_reset_then_get(self):
        first = OutputManager(format=OutputFormat.JSON, no_color=True)
        set_output(first)
        reset_output()
        assert get_output() is not first


# ------------------------------------------------------------------ #
# Convenience functions
# ------------------------------------------------------------------ #


class TestConvenienceFunctions:
    """Test module-level convenience functions delegate to global instance."""

    def test_print_structured_convenience(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        output_module.print_structured({"a": 1})
        assert json.loads(capfd.readouterr().out) == {"a": 1}

    @pytest.mark.parametrize("name", ["info", "error", "success", "warning", "suggest"])
    def test_diagnostic_convenience(self, capfd, non_tty, name):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        getattr(output_module, name)("hello")
        assert "hello" in capfd.readouterr().err

    def test_debug_convenience(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        output_module.debug("trace")
        assert "trace" in capfd.readouterr().err
