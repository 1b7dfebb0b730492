"""Terminal output for the installer.

All styling goes through Rich markup; nothing here keeps state besides the
console it writes to.
"""

from rich.console import Console
from rich.markup import escape

from opencode_slim.config.schemas import PROVIDER_DISPLAY_NAMES, PROVIDERS, InstallConfig

CHECK = "[green]✓[/green]"
CROSS = "[red]✗[/red]"
ARROW = "[blue]→[/blue]"
BULLET = "[dim]•[/dim]"
INFO = "[blue]ℹ[/blue]"
WARN = "[yellow]⚠[/yellow]"
STAR = "[yellow]★[/yellow]"
UNCHECKED = "[dim]○[/dim]"

PRODUCT_NAME = "oh-my-opencode-slim"
DOCS_URL = "https://opencode.ai/docs"
USAGE = (
    "Usage: opencode-slim install --no-tui --antigravity=<yes|no> "
    "--openai=<yes|no> --cerebras=<yes|no>"
)


class Reporter:
    """Renders installer progress and outcomes to a console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _print(self, message: str = "") -> None:
        self.console.print(message, soft_wrap=True)

    def header(self, is_update: bool) -> None:
        mode = "Update" if is_update else "Install"
        self._print()
        self._print(f"[bold]{PRODUCT_NAME} {mode}[/bold]")
        self._print("=" * 30)
        self._print()

    def step(self, number: int, total: int, message: str) -> None:
        self._print(f"[dim]{escape(f'[{number}/{total}]')}[/dim] {escape(message)}")

    def success(self, message: str) -> None:
        self._print(f"{CHECK} {escape(message)}")

    def step_success(self, label: str, config_path: str | None) -> None:
        """Report a completed step and where it wrote to."""
        if config_path:
            self._print(f"{CHECK} {escape(label)} {ARROW} [dim]{escape(config_path)}[/dim]")
        else:
            self.success(label)

    def error(self, message: str) -> None:
        self._print(f"{CROSS} [red]{escape(message)}[/red]")

    def info(self, message: str) -> None:
        self._print(f"{INFO} {escape(message)}")

    def warning(self, message: str) -> None:
        self._print(f"{WARN} [yellow]{escape(message)}[/yellow]")

    def blank(self) -> None:
        self._print()

    def not_installed(self) -> None:
        self.error("OpenCode is not installed on this system.")
        self.info(f"Visit {DOCS_URL} for installation instructions")

    def validation_failed(self, errors: list[str]) -> None:
        self.error("Validation failed:")
        for err in errors:
            self._print(f"  {BULLET} {escape(err)}")
        self._print()
        self.info(USAGE)
        self._print()

    def summary(self, config: InstallConfig) -> None:
        self._print()
        self._print("[bold]Configuration Summary[/bold]")
        self._print()
        for provider in PROVIDERS:
            mark = CHECK if config.has_provider(provider) else UNCHECKED
            self._print(f"  {mark} {PROVIDER_DISPLAY_NAMES[provider]}")
        self._print()

    def completion(self, is_update: bool) -> None:
        """Print the success banner and next steps."""
        title = "Configuration updated!" if is_update else "Installation complete!"
        self._print(f"{STAR} [bold green]{title}[/bold green]")
        self._print()
        self._print("[bold]Next steps:[/bold]")
        self._print()
        self._print("  1. Authenticate with your providers:")
        self._print("     [blue]$ opencode auth login[/blue]")
        self._print()
        self._print("  2. Start OpenCode:")
        self._print("     [blue]$ opencode[/blue]")
        self._print()
