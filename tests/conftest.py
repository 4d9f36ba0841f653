"""Shared test fixtures for schemer.

Provides reusable fixtures for locating spec fixtures, building content
snapshots from in-memory documents, creating isolated config environments,
managing output state, and running CLI commands. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from schemer.output import reset_output
from schemer.parser import ContentProvider


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_dir() -> Path:
    """Directory of the multi-file petstore spec.

    ``openapi.yaml`` references ``resources/pets.yaml``,
    ``resources/pet.yaml`` and ``components.yaml``; ``resources/pet.yaml``
    in turn references ``resources/pet_get.yaml``.
    """
    return FIXTURES_DIR / "petstore"


@pytest.fixture
def petstore_root(petstore_dir: Path) -> Path:
    """Root document of the multi-file petstore spec."""
    return petstore_dir / "openapi.yaml"


@pytest.fixture
def petstore_inline() -> Path:
    """The same petstore as a single JSON document with no external refs."""
    return FIXTURES_DIR / "petstore_inline.json"


@pytest.fixture
def make_provider(tmp_path: Path) -> Callable[..., ContentProvider]:
    """Factory for in-memory content snapshots.

    The first argument is the root document; the optional second maps
    identities relative to ``tmp_path`` to their text. All text is dedented,
    so tests can write YAML as indented triple-quoted strings.

    Example::

        provider = make_provider(
            '''
            paths:
              $ref: Paths.yaml
            ''',
            {"Paths.yaml": "/pets: {}\\n"},
        )
    """

    def _make(root: str, documents: dict[str, str] | None = None) -> ContentProvider:
        contents = {"#": textwrap.dedent(root)}
        for identity, text in (documents or {}).items():
            contents[identity] = textwrap.dedent(text)
        return ContentProvider.from_mapping(contents, base=str(tmp_path))

    return _make


@pytest.fixture
def write_spec(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a dedented document under ``tmp_path/spec`` and return its path."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / "spec" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config. Clears all SCHEMER_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))

    for var in ["SCHEMER_FORMAT", "SCHEMER_RECURSIVE", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
