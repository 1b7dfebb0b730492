"""Pydantic schemas for installer configuration.

This module defines the data models for:
- install command arguments (raw provider flags)
- the resolved install configuration
- the configuration detected from an existing OpenCode setup
- oh-my-opencode-slim.json (lite config)
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Common Types
# =============================================================================

BooleanArg = Literal["yes", "no"]
ProviderName = Literal["antigravity", "openai", "cerebras"]

PROVIDERS: tuple[ProviderName, ...] = ("antigravity", "openai", "cerebras")

PROVIDER_DISPLAY_NAMES: dict[ProviderName, str] = {
    "antigravity": "Antigravity",
    "openai": "OpenAI",
    "cerebras": "Cerebras",
}


# =============================================================================
# Install Command Models
# =============================================================================


class InstallArgs(BaseModel):
    """Raw arguments of the install command.

    Provider flags hold exactly what the user typed, or None when the flag
    was omitted. They are validated by the resolver, never here, so that
    every problem can be reported at once.
    """

    model_config = ConfigDict(frozen=True)

    tui: bool = True
    antigravity: str | None = None
    openai: str | None = None
    cerebras: str | None = None

    def raw_value(self, provider: ProviderName) -> str | None:
        """Get the raw flag value for a provider."""
        value: str | None = getattr(self, provider)
        return value


class InstallConfig(BaseModel):
    """Resolved installation configuration.

    Every provider flag is a definite boolean.
    """

    model_config = ConfigDict(frozen=True)

    has_antigravity: bool = False
    has_openai: bool = False
    has_cerebras: bool = False

    def has_provider(self, provider: ProviderName) -> bool:
        """Check whether a provider is enabled."""
        enabled: bool = getattr(self, f"has_{provider}")
        return enabled

    @property
    def enabled_providers(self) -> list[ProviderName]:
        return [p for p in PROVIDERS if self.has_provider(p)]

    @property
    def has_any_provider(self) -> bool:
        return bool(self.enabled_providers)

    @classmethod
    def from_providers(cls, providers: dict[ProviderName, bool]) -> "InstallConfig":
        """Build a config from a provider -> enabled mapping."""
        return cls(**{f"has_{name}": enabled for name, enabled in providers.items()})


class DetectedConfig(InstallConfig):
    """Snapshot of an existing OpenCode configuration.

    is_installed is True when the plugin is already registered, which
    frames the run as an update rather than a fresh install.
    """

    is_installed: bool = False


# =============================================================================
# Lite Config (oh-my-opencode-slim.json)
# =============================================================================


class AgentModelConfig(BaseModel):
    """Model assignment for a single agent."""

    model_config = ConfigDict(extra="allow")

    model: str


class LiteConfig(BaseModel):
    """The plugin's own configuration file."""

    model_config = ConfigDict(extra="allow")

    agents: dict[str, AgentModelConfig] = Field(default_factory=dict)

    def uses_provider_prefix(self, prefix: str) -> bool:
        """Check whether any agent model starts with a provider prefix."""
        return any(agent.model.startswith(prefix) for agent in self.agents.values())
