"""Tests for opencode_slim.config.schemas module."""

import pytest
from pydantic import ValidationError

from opencode_slim.config.schemas import (
    DetectedConfig,
    InstallArgs,
    InstallConfig,
    LiteConfig,
)


class TestInstallArgs:
    """Tests for InstallArgs model."""

    def test_defaults(self):
        """Interactive by default with no flags."""
        args = InstallArgs()

        assert args.tui is True
        assert args.raw_value("antigravity") is None

    def test_keeps_raw_values(self):
        """Raw values are stored unvalidated."""
        args = InstallArgs(tui=False, openai="maybe")

        assert args.raw_value("openai") == "maybe"

    def test_is_frozen(self):
        """Arguments cannot be changed after parsing."""
        args = InstallArgs()

        with pytest.raises(ValidationError):
            args.tui = False


class TestInstallConfig:
    """Tests for InstallConfig model."""

    def test_enabled_providers(self):
        """Lists enabled providers in fixed order."""
        config = InstallConfig(has_cerebras=True, has_antigravity=True)

        assert config.enabled_providers == ["antigravity", "cerebras"]
        assert config.has_any_provider is True

    def test_no_providers(self):
        """Default config has nothing enabled."""
        assert InstallConfig().has_any_provider is False

    def test_from_providers(self):
        """Builds from a provider mapping."""
        config = InstallConfig.from_providers(
            {"antigravity": False, "openai": True, "cerebras": False}
        )

        assert config == InstallConfig(has_openai=True)

    def test_is_frozen(self):
        """Config cannot be mutated."""
        config = InstallConfig()

        with pytest.raises(ValidationError):
            config.has_openai = True

    def test_rejects_non_boolean(self):
        """Only definite booleans are accepted."""
        with pytest.raises(ValidationError):
            InstallConfig(has_openai="maybe")


class TestDetectedConfig:
    """Tests for DetectedConfig model."""

    def test_defaults(self):
        """Fresh system detects nothing."""
        detected = DetectedConfig()

        assert detected.is_installed is False
        assert detected.has_any_provider is False

    def test_has_provider(self):
        """Shares provider accessors with InstallConfig."""
        assert DetectedConfig(has_openai=True).has_provider("openai") is True


class TestLiteConfig:
    """Tests for LiteConfig model."""

    def test_uses_provider_prefix(self):
        """Detects models by provider prefix."""
        lite = LiteConfig.model_validate(
            {"agents": {"oracle": {"model": "openai/gpt-5.1"}}, "disabled_agents": []}
        )

        assert lite.uses_provider_prefix("openai/") is True
        assert lite.uses_provider_prefix("cerebras/") is False

    def test_requires_model(self):
        """Agent entries need a model."""
        with pytest.raises(ValidationError):
            LiteConfig.model_validate({"agents": {"oracle": {}}})
