"""Interactive question/answer mode."""

import asyncio
import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from opencode_slim.config.schemas import DetectedConfig, InstallConfig, ProviderName

logger = logging.getLogger(__name__)

QUESTIONS: list[tuple[ProviderName, str]] = [
    ("antigravity", "Do you have an Antigravity subscription?"),
    ("openai", "Do you have access to OpenAI API?"),
    ("cerebras", "Do you have access to Cerebras API?"),
]

AFFIRMATIVE = ("y", "yes")
NEGATIVE = ("n", "no")


def default_hint(default: bool) -> str:
    return "[Y/n]" if default else "[y/N]"


def interpret_answer(answer: str, default: bool) -> bool:
    """Interpret a line of user input as yes/no.

    Empty input keeps the default. Unrecognized input also keeps the
    default, without any error being reported.
    """
    normalized = answer.strip().lower()
    if normalized in AFFIRMATIVE:
        return True
    if normalized in NEGATIVE:
        return False
    if normalized:
        logger.debug("Unrecognized answer %r, keeping default", normalized)
    return default


class Prompter:
    """Asks the fixed provider questions, one line of input per question."""

    def __init__(self, console: Console | None = None, stream: TextIO | None = None):
        """Initialize the prompter.

        Args:
            console: Console to write questions to
            stream: Input stream (defaults to sys.stdin at read time)
        """
        self.console = console or Console()
        self._stream = stream
        self._lock = asyncio.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    async def read_line(self) -> str:
        """Read one line of input.

        The reader is held only for the duration of the read. A closed or
        exhausted stream yields an empty string.
        """
        async with self._lock:
            line = await asyncio.to_thread(self.stream.readline)
        return line or ""

    async def ask_yes_no(self, prompt: str, default: bool = False) -> bool:
        """Ask a single yes/no question."""
        self.console.print(
            f"[blue]{escape(prompt)}[/blue] {escape(default_hint(default))}: ",
            end="",
        )
        answer = await self.read_line()
        return interpret_answer(answer, default)

    async def run(self, detected: DetectedConfig) -> InstallConfig:
        """Ask all questions, seeded with the detected configuration.

        Args:
            detected: Existing configuration used for defaults

        Returns:
            The resolved InstallConfig
        """
        answers: dict[ProviderName, bool] = {}
        total = len(QUESTIONS)
        for number, (provider, question) in enumerate(QUESTIONS, start=1):
            self.console.print(f"[bold]Question {number}/{total}:[/bold]")
            answers[provider] = await self.ask_yes_no(question, detected.has_provider(provider))
            self.console.print()
        return InstallConfig.from_providers(answers)
