"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with DYNRECORD_ prefix
3. .env file named by DYNRECORD_ENV_FILE (if present)

Example:
  DYNRECORD_IDENTIFIER_PATTERN='^[a-zA-Z][a-zA-Z0-9_]*$'
  DYNRECORD_LOG_DEFAULT_READS=true
"""

import functools as _functools
import logging as _logging
import os as _os
import pathlib as _pathlib
import re as _re
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import dynrecord.constants as constants

_logger = _logging.getLogger(__name__)


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit DYNRECORD_ENV_FILE is honoured; a library must not
    pick up whatever .env happens to sit in the working directory.
    """
    if env_file := _os.environ.get(constants.ENV_FILE_VAR):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    dynrecord configuration settings.

    All settings can be overridden via environment variables with the
    DYNRECORD_ prefix, e.g. DYNRECORD_LOG_DEFAULT_READS=true.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    identifier_pattern: str = _pydantic.Field(
        default=constants.DEFAULT_IDENTIFIER_PATTERN,
        description="Regex for attribute names that fall back to the record default",
    )

    log_default_reads: bool = _pydantic.Field(
        default=False,
        description="Log reads of unset attribute names at INFO instead of DEBUG",
    )

    @_pydantic.field_validator("identifier_pattern")
    @classmethod
    def _validate_identifier_pattern(cls, value: str) -> str:
        """Reject patterns that don't compile."""
        try:
            _re.compile(value)
        except _re.error as e:
            raise ValueError(f"identifier_pattern is not a valid regex: {e}") from e
        return value

    @property
    def identifier_regex(self) -> _re.Pattern[str]:
        """The compiled identifier pattern."""
        return _compile(self.identifier_pattern)

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for:
        - Test isolation (prevent .env from polluting tests)
        - Debugging (reproduce issues without .env interference)
        """
        return cls(_env_file=None, **kwargs)


@_functools.lru_cache(maxsize=None)
def _compile(pattern: str) -> _re.Pattern[str]:
    return _re.compile(pattern)


@_functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    settings = Settings()
    _logger.debug(
        "Loaded dynrecord settings: identifier_pattern=%r log_default_reads=%s",
        settings.identifier_pattern,
        settings.log_default_reads,
    )
    return settings


def reload_settings() -> Settings:
    """Discard cached settings and load them again from the environment."""
    get_settings.cache_clear()
    return get_settings()
