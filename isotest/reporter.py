"""Categorized output for per-test status lines."""

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol, TextIO

Category = Literal["success", "failure", "warning", "describe", "highlight"]

INDENT = " " * 6

ANSI_RESET = "\033[0m"
CATEGORY_COLOURS: Mapping[Category, str] = {
    "success": "\033[32m",
    "failure": "\033[1m\033[31m",
    "warning": "\033[33m",
    "describe": "\033[2m",
    "highlight": "\033[36m",
}


class Reporter(Protocol):
    """Sink for categorized text produced while a suite runs."""

    def report(self, category: Category, text: str) -> None:
        """Write ``text``, styled according to ``category``."""
        ...


@dataclass(kw_only=True)
class StreamReporter:
    """Writes categorized text to a stream, standard output by default.

    The default stream is looked up on every write so redirected or captured
    output is honoured.
    """

    stream: TextIO | None = None
    colour: bool = False

    def report(self, category: Category, text: str) -> None:
        """Write ``text``, wrapped in ANSI colour codes when enabled."""
        stream = self.stream if self.stream is not None else sys.stdout
        if self.colour:
            text = f"{ANSI_RESET}{CATEGORY_COLOURS[category]}{text}{ANSI_RESET}"
        stream.write(text)
        stream.flush()


class NullReporter:
    """Discards everything; used for quiet suites."""

    def report(self, category: Category, text: str) -> None:
        """Ignore ``text``."""
