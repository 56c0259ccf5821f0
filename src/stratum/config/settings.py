"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with STRATUM_ prefix
3. .env file (if STRATUM_ENV_FILE points at one)
4. Field defaults (lowest)

Examples:
  STRATUM_HTTP_TIMEOUT=5
  STRATUM_DOCUMENT_EXTENSION=.yml
  STRATUM_LOG_LEVEL=DEBUG
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import stratum.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit STRATUM_ENV_FILE is honoured. If it is set but the file
    does not exist, no .env is loaded rather than falling back silently.
    """
    if env_file := _os.environ.get("STRATUM_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Stratum configuration settings.

    All settings can be overridden via environment variables with the
    STRATUM_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="STRATUM_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    document_extension: str = constants.DEFAULT_DOCUMENT_EXTENSION
    """Extension of documents collected from values directories."""

    http_timeout: float = _pydantic.Field(default=constants.DEFAULT_HTTP_TIMEOUT, gt=0)
    """Timeout in seconds for HTTP(S) retrieval."""

    user_agent: str = constants.DEFAULT_USER_AGENT
    """User-Agent header for HTTP(S) retrieval."""

    log_level: str = constants.DEFAULT_LOG_LEVEL
    """Root log level used by the CLI when --verbose is not given."""

    @_pydantic.field_validator("document_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if value and not value.startswith("."):
            raise ValueError(f"document extension must start with '.', got {value!r}")
        return value

    @_pydantic.field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    def to_display_dict(self) -> dict[str, _typing.Any]:
        """Return settings as a JSON-serializable dict for display."""
        return self.model_dump(mode="json")
