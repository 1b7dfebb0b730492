"""Main CLI application for the oh-my-opencode-slim installer."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from opencode_slim import __version__
from opencode_slim.config.schemas import InstallArgs
from opencode_slim.core.installer import Installer
from opencode_slim.core.reporter import Reporter
from opencode_slim.host.opencode import OpenCodeConfigManager

# Create the main Typer app
app = typer.Typer(
    name="opencode-slim",
    help="Installer for the oh-my-opencode-slim OpenCode plugin",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

# Set up logger for the opencode_slim package
logger = logging.getLogger("opencode_slim")


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with source paths
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger.setLevel(level)

    # Only add handler if not already configured
    if not logger.handlers:
        handler = RichHandler(
            console=error_console,
            show_time=verbosity >= 2,
            show_path=verbosity >= 3,
            rich_tracebacks=True,
        )
        handler.setLevel(level)
        logger.addHandler(handler)
    else:
        # Update existing handler level
        for h in logger.handlers:
            h.setLevel(level)


@app.callback()
def callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v info, -vv debug, -vvv debug with paths)",
        ),
    ] = 0,
) -> None:
    """oh-my-opencode-slim installer."""
    setup_logging(verbose)


@app.command()
def version() -> None:
    """Show the installer version."""
    console.print(f"opencode-slim {__version__}")


@app.command()
def install(
    tui: Annotated[
        bool,
        typer.Option(
            "--tui/--no-tui",
            help="Ask questions interactively (use --no-tui with provider flags for scripts)",
        ),
    ] = True,
    antigravity: Annotated[
        str | None,
        typer.Option(
            "--antigravity",
            metavar="yes|no",
            help="Antigravity subscription (required with --no-tui)",
        ),
    ] = None,
    openai: Annotated[
        str | None,
        typer.Option(
            "--openai",
            metavar="yes|no",
            help="OpenAI API access (required with --no-tui)",
        ),
    ] = None,
    cerebras: Annotated[
        str | None,
        typer.Option(
            "--cerebras",
            metavar="yes|no",
            help="Cerebras API access (required with --no-tui)",
        ),
    ] = None,
    config_dir: Annotated[
        Path | None,
        typer.Option(
            "--config-dir",
            help="OpenCode configuration directory (defaults to ~/.config/opencode)",
        ),
    ] = None,
) -> None:
    """Install or update oh-my-opencode-slim in OpenCode.

    Without flags, asks which providers you have access to. For scripted
    installs pass --no-tui together with all three provider flags:

      opencode-slim install --no-tui --antigravity=yes --openai=no --cerebras=no

    Running install again updates an existing installation.
    """
    args = InstallArgs(tui=tui, antigravity=antigravity, openai=openai, cerebras=cerebras)
    manager = OpenCodeConfigManager(config_dir)
    installer = Installer(manager, Reporter(console))

    exit_code = asyncio.run(installer.install(args))
    if exit_code != 0:
        raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
