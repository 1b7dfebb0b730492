"""OpenCode host configuration manager.

Layout of the OpenCode configuration directory touched by the installer:

    ~/.config/opencode/
    ├── opencode.json             # Host config: plugin list, providers
    └── oh-my-opencode-slim.json  # Lite config: agent -> model mapping

Both files are merged rather than replaced where the user may have edited
them, so re-running the installer is always safe.
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from opencode_slim.config.parser import ConfigError, load_json_or_empty, save_json
from opencode_slim.config.schemas import (
    AgentModelConfig,
    DetectedConfig,
    InstallConfig,
    LiteConfig,
    ProviderName,
)
from opencode_slim.host.base import HostConfigManager, StepResult
from opencode_slim.utils.platform import get_opencode_config_dir

logger = logging.getLogger(__name__)

PLUGIN_NAME = "oh-my-opencode-slim"
AUTH_PLUGIN_NAME = "opencode-antigravity-auth"
AUTH_PLUGIN_SPEC = f"{AUTH_PLUGIN_NAME}@latest"

CONFIG_SCHEMA_URL = "https://opencode.ai/config.json"
OPENCODE_CONFIG_FILE = "opencode.json"
LITE_CONFIG_FILE = f"{PLUGIN_NAME}.json"

# Prefixes used in lite config model ids, used to detect enabled providers
PROVIDER_MODEL_PREFIXES: dict[ProviderName, str] = {
    "antigravity": "google/",
    "openai": "openai/",
    "cerebras": "cerebras/",
}

# Models exposed through the Antigravity auth plugin (provider "google")
ANTIGRAVITY_MODELS: dict[str, dict[str, Any]] = {
    "gemini-3-pro-high": {
        "name": "Gemini 3 Pro High (Antigravity)",
        "limit": {"context": 1048576, "output": 65535},
    },
    "gemini-3-flash": {
        "name": "Gemini 3 Flash (Antigravity)",
        "limit": {"context": 1048576, "output": 65536},
    },
    "claude-opus-4-5-thinking": {
        "name": "Claude Opus 4.5 Thinking (Antigravity)",
        "limit": {"context": 200000, "output": 64000},
    },
}

# Per-agent model preferences, first enabled provider wins. Every provider
# leads at least one list so that detection can read the choice back.
AGENT_MODEL_PREFERENCES: dict[str, list[tuple[ProviderName, str]]] = {
    "orchestrator": [
        ("antigravity", "google/claude-opus-4-5-thinking"),
        ("openai", "openai/gpt-5.1"),
        ("cerebras", "cerebras/zai-glm-4.6"),
    ],
    "oracle": [
        ("openai", "openai/gpt-5.1-codex"),
        ("antigravity", "google/gemini-3-pro-high"),
        ("cerebras", "cerebras/zai-glm-4.6"),
    ],
    "librarian": [
        ("antigravity", "google/gemini-3-flash"),
        ("openai", "openai/gpt-5.1-codex-mini"),
        ("cerebras", "cerebras/zai-glm-4.6"),
    ],
    "explorer": [
        ("cerebras", "cerebras/zai-glm-4.6"),
        ("antigravity", "google/gemini-3-flash"),
        ("openai", "openai/gpt-5.1-codex-mini"),
    ],
    "designer": [
        ("antigravity", "google/gemini-3-pro-high"),
        ("openai", "openai/gpt-5.1"),
        ("cerebras", "cerebras/zai-glm-4.6"),
    ],
    "fixer": [
        ("cerebras", "cerebras/zai-glm-4.6"),
        ("openai", "openai/gpt-5.1-codex-mini"),
        ("antigravity", "google/gemini-3-flash"),
    ],
}

FALLBACK_MODEL = "opencode/big-pickle"


def plugin_base_name(entry: str) -> str:
    """Strip a version suffix from a plugin entry.

    Handles scoped packages, e.g. "@scope/name@1.0.0" -> "@scope/name".
    """
    if "@" in entry[1:]:
        return entry.rsplit("@", 1)[0]
    return entry


def select_agent_model(agent: str, config: InstallConfig) -> str:
    """Pick the model for an agent based on enabled providers."""
    for provider, model in AGENT_MODEL_PREFERENCES[agent]:
        if config.has_provider(provider):
            return model
    return FALLBACK_MODEL


def build_lite_config(config: InstallConfig) -> LiteConfig:
    """Build the lite config for a resolved install configuration."""
    return LiteConfig(
        agents={
            agent: AgentModelConfig(model=select_agent_model(agent, config))
            for agent in AGENT_MODEL_PREFERENCES
        }
    )


class OpenCodeConfigManager(HostConfigManager):
    """Reads and writes OpenCode configuration files."""

    def __init__(self, config_dir: Path | None = None, executable: str = "opencode"):
        """Initialize the manager.

        Args:
            config_dir: OpenCode configuration directory (defaults to the
                platform location, see get_opencode_config_dir)
            executable: Name or path of the opencode binary
        """
        self.config_dir = config_dir if config_dir is not None else get_opencode_config_dir()
        self.executable = executable

    @property
    def opencode_config_path(self) -> Path:
        return self.config_dir / OPENCODE_CONFIG_FILE

    @property
    def lite_config_path(self) -> Path:
        return self.config_dir / LITE_CONFIG_FILE

    # =========================================================================
    # Detection
    # =========================================================================

    def detect_current_config(self) -> DetectedConfig:
        plugins: list[str] = []
        try:
            data = load_json_or_empty(self.opencode_config_path)
            raw_plugins = data.get("plugin", [])
            if isinstance(raw_plugins, list):
                plugins = [p for p in raw_plugins if isinstance(p, str)]
        except ConfigError as e:
            logger.warning("Ignoring unreadable OpenCode config: %s", e)

        lite = LiteConfig()
        try:
            lite = LiteConfig.model_validate(load_json_or_empty(self.lite_config_path))
        except ConfigError as e:
            logger.warning("Ignoring unreadable lite config: %s", e)
        except ValidationError as e:
            logger.warning("Ignoring invalid lite config %s: %s", self.lite_config_path, e)

        names = {plugin_base_name(p) for p in plugins}
        detected = DetectedConfig(
            is_installed=PLUGIN_NAME in names,
            has_antigravity=AUTH_PLUGIN_NAME in names,
            has_openai=lite.uses_provider_prefix(PROVIDER_MODEL_PREFIXES["openai"]),
            has_cerebras=lite.uses_provider_prefix(PROVIDER_MODEL_PREFIXES["cerebras"]),
        )
        logger.debug("Detected configuration: %s", detected)
        return detected

    async def is_opencode_installed(self) -> bool:
        return await self._query_version() is not None

    async def get_opencode_version(self) -> str | None:
        version = await self._query_version()
        return version or None

    async def _query_version(self) -> str | None:
        """Run `opencode --version`, returning stdout or None on failure."""
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                "--version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug("Cannot run %s: %s", self.executable, e)
            return None

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            logger.debug(
                "%s --version exited with %s: %s",
                self.executable,
                process.returncode,
                stderr.decode(errors="replace").strip(),
            )
            return None
        return stdout.decode(errors="replace").strip()

    # =========================================================================
    # Host Config
    # =========================================================================

    async def add_plugin_to_opencode_config(self) -> StepResult:
        def edit(data: dict[str, Any]) -> None:
            self._ensure_plugin(data, PLUGIN_NAME, PLUGIN_NAME)

        return self._edit_opencode_config(edit)

    async def add_auth_plugins(self, config: InstallConfig) -> StepResult:
        def edit(data: dict[str, Any]) -> None:
            if config.has_antigravity:
                self._ensure_plugin(data, AUTH_PLUGIN_NAME, AUTH_PLUGIN_SPEC)

        return self._edit_opencode_config(edit)

    def add_provider_config(self, config: InstallConfig) -> StepResult:
        def edit(data: dict[str, Any]) -> None:
            if not config.has_antigravity:
                return
            providers = self._ensure_mapping(data, "provider")
            google = self._ensure_mapping(providers, "google")
            google.setdefault("name", "Google")
            models = self._ensure_mapping(google, "models")
            for model_id, model_config in ANTIGRAVITY_MODELS.items():
                existing = models.get(model_id)
                # User overrides of individual model keys win
                if isinstance(existing, dict):
                    models[model_id] = {**model_config, **existing}
                else:
                    models[model_id] = dict(model_config)

        return self._edit_opencode_config(edit)

    def write_lite_config(self, config: InstallConfig) -> StepResult:
        """Write oh-my-opencode-slim.json.

        The file is owned by the plugin and rewritten from scratch.
        """
        lite = build_lite_config(config)
        try:
            save_json(self.lite_config_path, lite.model_dump())
        except ConfigError as e:
            logger.debug("Failed to write lite config: %s", e)
            return StepResult.failed(str(e))
        logger.info("Wrote lite config to %s", self.lite_config_path)
        return StepResult.ok(str(self.lite_config_path))

    def _edit_opencode_config(self, edit: Callable[[dict[str, Any]], None]) -> StepResult:
        """Load opencode.json, apply an edit in place and save it."""
        path = self.opencode_config_path
        try:
            data = load_json_or_empty(path)
            if not data:
                data["$schema"] = CONFIG_SCHEMA_URL
            edit(data)
            save_json(path, data)
        except ConfigError as e:
            logger.debug("Failed to update %s: %s", path, e)
            return StepResult.failed(str(e))
        logger.info("Updated %s", path)
        return StepResult.ok(str(path))

    def _ensure_plugin(self, data: dict[str, Any], name: str, spec: str) -> None:
        plugins = data.setdefault("plugin", [])
        if not isinstance(plugins, list):
            raise ConfigError(
                f"'plugin' in {self.opencode_config_path} must be a list",
                self.opencode_config_path,
            )
        if any(isinstance(p, str) and plugin_base_name(p) == name for p in plugins):
            logger.debug("Plugin %s already registered", name)
            return
        plugins.append(spec)

    def _ensure_mapping(self, data: dict[str, Any], key: str) -> dict[str, Any]:
        value = data.setdefault(key, {})
        if not isinstance(value, dict):
            raise ConfigError(
                f"'{key}' in {self.opencode_config_path} must be an object",
                self.opencode_config_path,
            )
        return value
