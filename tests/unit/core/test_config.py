"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from medium_rest.core.config import (
    RecoverySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from medium_rest.core.exceptions import ConfigurationError
from medium_rest.models.enums import SlotOverflowPolicy, UnknownProgressionPolicy


class TestRecoverySettings:
    """Tests for RecoverySettings configuration."""

    def test_default_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default recovery policies."""
        monkeypatch.chdir(tmp_path)

        settings = RecoverySettings()

        assert settings.slot_overflow == SlotOverflowPolicy.SKIP
        assert settings.unknown_progression == UnknownProgressionPolicy.RAISE
        assert settings.max_recovery_slot_level == 5
        assert settings.wound_clears_label == "Wound Clears"

    def test_env_overrides(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test that policies can be set from the environment."""
        monkeypatch.chdir(tmp_path)

        settings = RecoverySettings()

        assert settings.slot_overflow == SlotOverflowPolicy.REJECT
        assert settings.unknown_progression == UnknownProgressionPolicy.IGNORE

    def test_slot_level_validation(self) -> None:
        """Test that the slot level ceiling must be a spell level."""
        with pytest.raises(ConfigurationError) as exc_info:
            RecoverySettings(max_recovery_slot_level=10)

        assert "max_recovery_slot_level" in str(exc_info.value)

    def test_slot_level_cannot_exceed_fifth(self) -> None:
        """Test that the ceiling cannot be raised past 5th level."""
        with pytest.raises(ConfigurationError) as exc_info:
            RecoverySettings(max_recovery_slot_level=9)

        assert exc_info.value.details["config_key"] == "max_recovery_slot_level"
        with pytest.raises(ConfigurationError):
            RecoverySettings(max_recovery_slot_level=6)

    def test_slot_level_can_be_lowered(self) -> None:
        """Test that a ceiling below 5th level is accepted."""
        assert RecoverySettings(max_recovery_slot_level=3).max_recovery_slot_level == 3

    def test_slot_level_lower_bound(self) -> None:
        """Test that zero is rejected as a slot level ceiling."""
        with pytest.raises(ConfigurationError):
            RecoverySettings(max_recovery_slot_level=0)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "Medium Rest"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert isinstance(settings.recovery, RecoverySettings)

    def test_debug_mode(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test debug mode and log level from the environment."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_returns_settings_instance(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that get_settings returns a Settings instance."""
        monkeypatch.chdir(tmp_path)

        assert isinstance(get_settings(), Settings)

    def test_caching(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_cache_clear(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that cache can be cleared."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_env_raises_configuration_error(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a bad policy value surfaces as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MEDIUM_REST_RECOVERY_SLOT_OVERFLOW", "clamp")

        with pytest.raises(ConfigurationError):
            get_settings()
