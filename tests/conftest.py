"""Shared fixtures for installer tests."""

import io
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from rich.console import Console

from opencode_slim.config.schemas import DetectedConfig, InstallConfig
from opencode_slim.core.reporter import Reporter
from opencode_slim.host.base import HostConfigManager, StepResult

STEP_CALLS = {"plugin", "auth", "providers", "lite-config"}


class FakeHostConfigManager(HostConfigManager):
    """In-memory host manager that records every call.

    Set failures[name] to make a step fail with that error message.
    """

    def __init__(
        self,
        installed: bool = True,
        version: str | None = "1.0.150",
        detected: DetectedConfig | None = None,
    ):
        self.installed = installed
        self.version = version
        self.detected = detected or DetectedConfig()
        self.failures: dict[str, str] = {}
        self.calls: list[str] = []
        self.configs: list[InstallConfig] = []

    @property
    def step_calls(self) -> list[str]:
        return [c for c in self.calls if c in STEP_CALLS]

    def _result(self, name: str) -> StepResult:
        self.calls.append(name)
        if name in self.failures:
            return StepResult.failed(self.failures[name])
        return StepResult.ok(f"/fake/{name}.json")

    def detect_current_config(self) -> DetectedConfig:
        self.calls.append("detect")
        return self.detected

    async def is_opencode_installed(self) -> bool:
        self.calls.append("is_installed")
        return self.installed

    async def get_opencode_version(self) -> str | None:
        self.calls.append("version")
        return self.version

    async def add_plugin_to_opencode_config(self) -> StepResult:
        return self._result("plugin")

    async def add_auth_plugins(self, config: InstallConfig) -> StepResult:
        self.configs.append(config)
        return self._result("auth")

    def add_provider_config(self, config: InstallConfig) -> StepResult:
        self.configs.append(config)
        return self._result("providers")

    def write_lite_config(self, config: InstallConfig) -> StepResult:
        self.configs.append(config)
        return self._result("lite-config")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory."""
    path = Path(tempfile.mkdtemp(prefix="opencode_slim_test_"))
    yield path
    if path.exists():
        shutil.rmtree(path)


@pytest.fixture
def config_dir(temp_dir: Path) -> Path:
    """An OpenCode configuration directory (not yet created)."""
    return temp_dir / "opencode"


@pytest.fixture
def fake_manager() -> FakeHostConfigManager:
    """Host manager with OpenCode installed and all steps succeeding."""
    return FakeHostConfigManager()


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving everything written to the console."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Plain-text console writing to the output buffer."""
    return Console(file=output, width=200, color_system=None)


@pytest.fixture
def reporter(console: Console) -> Reporter:
    """Reporter writing to the test console."""
    return Reporter(console)
