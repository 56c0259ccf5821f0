"""
Shared pytest fixtures for Stratum tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import io as _io
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import click.testing as _click_testing
import pytest as _pytest

import stratum.config as config

# Directory holding the on-disk values fixtures
TESTDATA_DIR = _pathlib.Path(__file__).parent / "values" / "testdata"

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "STRATUM_DOCUMENT_EXTENSION",
    "STRATUM_HTTP_TIMEOUT",
    "STRATUM_USER_AGENT",
    "STRATUM_LOG_LEVEL",
    "STRATUM_ENV_FILE",
]


@_pytest.fixture
def testdata() -> _pathlib.Path:
    """Path to the checked-in values fixtures."""
    return TESTDATA_DIR


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with Stratum keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if k not in ENV_KEYS_TO_CLEAR}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]) -> _typing.Any:
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env: _typing.Any) -> config.Settings:
    """Settings instance isolated from environment and .env file."""
    with isolated_env:
        return config.Settings.construct_without_dotenv()


@_pytest.fixture
def write_tree(tmp_path: _pathlib.Path) -> _typing.Callable[[dict[str, str]], _pathlib.Path]:
    """
    Factory that writes a tree of files below tmp_path.

    Usage:
        root = write_tree({"values.d/a.yaml": "a: 1\\n"})
    """

    def _write(files: dict[str, str]) -> _pathlib.Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@_pytest.fixture
def stdin_stream() -> _typing.Callable[[str], _io.BytesIO]:
    """Factory for a fake stdin stream with the given text."""

    def _make(text: str) -> _io.BytesIO:
        return _io.BytesIO(text.encode("utf-8"))

    return _make


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """CLI runner for end-to-end tests."""
    return _click_testing.CliRunner()
