"""Installation orchestrator.

This module contains the Installer which runs the ordered installation
steps against a HostConfigManager. It stops at the first failing step and
turns every outcome into a process exit code. Nothing is rolled back: a
partially applied configuration is fixed by simply running again.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from opencode_slim.config.schemas import InstallArgs, InstallConfig
from opencode_slim.core.prompter import Prompter
from opencode_slim.core.reporter import Reporter
from opencode_slim.core.resolver import ArgumentValidationError, resolve_args
from opencode_slim.host.base import HostConfigManager, StepResult

logger = logging.getLogger("opencode_slim.installer")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

StepAction = Callable[[InstallConfig], Awaitable[StepResult]]


@dataclass(frozen=True)
class InstallStep:
    """A single delegated installation step."""

    name: str
    message: str
    success_label: str
    action: StepAction


class Installer:
    """Orchestrates the installation.

    The installer decides which steps run and in what order. All reading
    and writing of host configuration is delegated to the manager.
    """

    def __init__(
        self,
        manager: HostConfigManager,
        reporter: Reporter | None = None,
        prompter: Prompter | None = None,
    ):
        """Initialize the installer.

        Args:
            manager: Host configuration collaborator
            reporter: Output renderer
            prompter: Interactive prompter, used only in interactive mode
        """
        self.manager = manager
        self.reporter = reporter or Reporter()
        self.prompter = prompter or Prompter(self.reporter.console)

    def plan(self, config: InstallConfig) -> list[InstallStep]:
        """Build the steps that follow the OpenCode check.

        Auth plugin and provider steps are only included with Antigravity.
        """
        steps = [
            InstallStep(
                name="plugin",
                message="Adding oh-my-opencode-slim plugin...",
                success_label="Plugin added",
                action=self._add_plugin,
            )
        ]
        if config.has_antigravity:
            steps.append(
                InstallStep(
                    name="auth",
                    message="Adding auth plugins...",
                    success_label="Auth plugins configured",
                    action=self.manager.add_auth_plugins,
                )
            )
            steps.append(
                InstallStep(
                    name="providers",
                    message="Adding provider configurations...",
                    success_label="Providers configured",
                    action=self._add_provider_config,
                )
            )
        steps.append(
            InstallStep(
                name="lite-config",
                message="Writing oh-my-opencode-slim configuration...",
                success_label="Config written",
                action=self._write_lite_config,
            )
        )
        return steps

    async def install(self, args: InstallArgs) -> int:
        """Run the install command.

        Args:
            args: Raw install arguments

        Returns:
            Process exit code
        """
        if not args.tui:
            try:
                config = resolve_args(args)
            except ArgumentValidationError as e:
                logger.info("Rejected install arguments: %s", e.errors)
                self.reporter.header(is_update=False)
                self.reporter.validation_failed(e.errors)
                return EXIT_FAILURE
            return await self.run(config)

        detected = self.manager.detect_current_config()
        self.reporter.header(detected.is_installed)
        if not await self._check_opencode(1, 1):
            return EXIT_FAILURE
        self.reporter.blank()

        config = await self.prompter.run(detected)
        return await self.run(config)

    async def run(self, config: InstallConfig) -> int:
        """Run all installation steps for a resolved configuration.

        Args:
            config: Resolved install configuration

        Returns:
            Process exit code
        """
        detected = self.manager.detect_current_config()
        is_update = detected.is_installed
        self.reporter.header(is_update)

        steps = self.plan(config)
        total = len(steps) + 1
        logger.info(
            "Starting %s with %d step(s): %s",
            "update" if is_update else "install",
            total,
            config,
        )

        if not await self._check_opencode(1, total):
            return EXIT_FAILURE

        for number, step in enumerate(steps, start=2):
            self.reporter.step(number, total, step.message)
            result = await step.action(config)
            if not result.success:
                logger.info("Step %s failed: %s", step.name, result.error)
                self.reporter.error(f"Failed: {result.error}")
                return EXIT_FAILURE
            self.reporter.step_success(step.success_label, result.config_path)

        self.reporter.summary(config)

        if not config.has_any_provider:
            self.reporter.warning("No providers configured. At least one provider is required.")
            return EXIT_FAILURE

        self.reporter.completion(is_update)
        return EXIT_SUCCESS

    async def _check_opencode(self, number: int, total: int) -> bool:
        """Verify OpenCode is installed and report its version."""
        self.reporter.step(number, total, "Checking OpenCode installation...")
        if not await self.manager.is_opencode_installed():
            logger.info("OpenCode not found")
            self.reporter.not_installed()
            return False

        version = await self.manager.get_opencode_version()
        self.reporter.success(f"OpenCode {version or ''} detected")
        return True

    async def _add_plugin(self, config: InstallConfig) -> StepResult:
        return await self.manager.add_plugin_to_opencode_config()

    async def _add_provider_config(self, config: InstallConfig) -> StepResult:
        return self.manager.add_provider_config(config)

    async def _write_lite_config(self, config: InstallConfig) -> StepResult:
        return self.manager.write_lite_config(config)
