"""Abstract base class for host configuration managers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from opencode_slim.config.schemas import DetectedConfig, InstallConfig


@dataclass(frozen=True)
class StepResult:
    """Result of a single delegated installation step.

    error is an opaque, human-readable message; the installer surfaces it
    verbatim and attaches no meaning to it.
    """

    success: bool
    error: str | None = None
    config_path: str | None = None

    @classmethod
    def ok(cls, config_path: str | None = None) -> "StepResult":
        return cls(success=True, config_path=config_path)

    @classmethod
    def failed(cls, error: str) -> "StepResult":
        return cls(success=False, error=error)


class HostConfigManager(ABC):
    """Abstract interface to the host application's configuration.

    Methods that may wait on I/O are coroutines. add_provider_config and
    write_lite_config are plain methods and complete before returning.
    """

    @abstractmethod
    def detect_current_config(self) -> DetectedConfig:
        """Read the existing host configuration.

        Returns:
            DetectedConfig snapshot. Missing or unreadable files yield
            an all-false snapshot rather than an error.
        """
        ...

    @abstractmethod
    async def is_opencode_installed(self) -> bool:
        """Check whether the host application is available."""
        ...

    @abstractmethod
    async def get_opencode_version(self) -> str | None:
        """Get the host application's version, if it can be determined."""
        ...

    @abstractmethod
    async def add_plugin_to_opencode_config(self) -> StepResult:
        """Register this plugin in the host configuration."""
        ...

    @abstractmethod
    async def add_auth_plugins(self, config: InstallConfig) -> StepResult:
        """Register the auth plugins required by the enabled providers."""
        ...

    @abstractmethod
    def add_provider_config(self, config: InstallConfig) -> StepResult:
        """Write provider definitions into the host configuration."""
        ...

    @abstractmethod
    def write_lite_config(self, config: InstallConfig) -> StepResult:
        """Write the plugin's own configuration file."""
        ...
