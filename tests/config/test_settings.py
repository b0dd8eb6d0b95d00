"""Tests for configuration settings."""

import os as _os
import pathlib as _pathlib
import unittest.mock as _mock

import pydantic as _pydantic
import pytest as _pytest

import dynrecord.config as config
import dynrecord.constants as constants


class TestSettingsDefaults:
    """Test Settings default values when environment is clean."""

    def test_default_identifier_pattern(self, isolated_env) -> None:
        """Default pattern is a lowercase letter plus word characters."""
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()
            assert settings.identifier_pattern == constants.DEFAULT_IDENTIFIER_PATTERN

    def test_default_log_default_reads_is_false(self, isolated_env) -> None:
        """Default reads are logged at DEBUG unless asked otherwise."""
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()
            assert settings.log_default_reads is False

    @_pytest.mark.parametrize(
        ("name", "matches"),
        [
            ("name", True),
            ("first_name", True),
            ("camelCase2", True),
            ("x", False),
            ("_private", False),
            ("Name", False),
            ("name?", False),
        ],
    )
    def test_default_regex(self, isolated_env, name: str, matches: bool) -> None:
        """The compiled default pattern accepts only simple lowercase identifiers."""
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()
            assert bool(settings.identifier_regex.match(name)) is matches


class TestSettingsFromEnvironment:
    """Test Settings overrides from DYNRECORD_ environment variables."""

    def test_identifier_pattern_from_env(self, clean_env: dict[str, str]) -> None:
        """DYNRECORD_IDENTIFIER_PATTERN overrides the default."""
        env = {**clean_env, "DYNRECORD_IDENTIFIER_PATTERN": r"^\w+$"}
        with _mock.patch.dict(_os.environ, env, clear=True):
            settings = config.Settings.construct_without_dotenv()
            assert settings.identifier_pattern == r"^\w+$"

    def test_log_default_reads_from_env(self, clean_env: dict[str, str]) -> None:
        """DYNRECORD_LOG_DEFAULT_READS parses booleans."""
        env = {**clean_env, "DYNRECORD_LOG_DEFAULT_READS": "1"}
        with _mock.patch.dict(_os.environ, env, clear=True):
            settings = config.Settings.construct_without_dotenv()
            assert settings.log_default_reads is True

    def test_invalid_pattern_rejected(self, clean_env: dict[str, str]) -> None:
        """A pattern that doesn't compile fails validation."""
        env = {**clean_env, "DYNRECORD_IDENTIFIER_PATTERN": "([a-z"}
        with _mock.patch.dict(_os.environ, env, clear=True):
            with _pytest.raises(_pydantic.ValidationError, match="not a valid regex"):
                config.Settings.construct_without_dotenv()

    def test_constructor_arguments_win(self, clean_env: dict[str, str]) -> None:
        """Explicit arguments take precedence over the environment."""
        env = {**clean_env, "DYNRECORD_LOG_DEFAULT_READS": "true"}
        with _mock.patch.dict(_os.environ, env, clear=True):
            settings = config.Settings.construct_without_dotenv(log_default_reads=False)
            assert settings.log_default_reads is False

    def test_env_file_honoured_when_given(
        self, clean_env: dict[str, str], tmp_path: _pathlib.Path
    ) -> None:
        """An explicit .env file is read when passed in."""
        env_file = tmp_path / "dynrecord.env"
        env_file.write_text("DYNRECORD_LOG_DEFAULT_READS=true\n")
        with _mock.patch.dict(_os.environ, clean_env, clear=True):
            settings = config.Settings(_env_file=str(env_file))
            assert settings.log_default_reads is True


class TestSettingsCache:
    """get_settings() / reload_settings()."""

    def test_get_settings_cached(self) -> None:
        """The same instance is returned until reloaded."""
        assert config.get_settings() is config.get_settings()

    def test_reload_picks_up_environment(self) -> None:
        """reload_settings() reads the environment again."""
        before = config.get_settings()
        with _mock.patch.dict(_os.environ, {"DYNRECORD_LOG_DEFAULT_READS": "true"}):
            after = config.reload_settings()

        assert before.log_default_reads is False
        assert after.log_default_reads is True
        assert config.get_settings() is after
