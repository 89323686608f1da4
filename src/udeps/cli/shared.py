# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, context)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..config.models import UdepsConfig
from ..errors import Issue

_KEY_VALUE_RE: Final[re.Pattern[str]] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")
_FAIL_GLYPH: Final[str] = "❌ "
_WARN_GLYPH: Final[str] = "⚠️ "
_OK_GLYPH: Final[str] = "✅ "
_INFO_GLYPH: Final[str] = "ℹ️ "


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Status printer honouring the CLI emoji and colour settings.

    Each status line carries an optional emoji prefix and a Rich style. The
    console drops styling on its own when stdout is not a terminal.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        self._status(message, glyph=_FAIL_GLYPH, style="red")

    def warn(self, message: str) -> None:
        self._status(message, glyph=_WARN_GLYPH, style="yellow")

    def ok(self, message: str) -> None:
        self._status(message, glyph=_OK_GLYPH, style="green")

    def info(self, message: str) -> None:
        self._status(message, glyph=_INFO_GLYPH, style="cyan")

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def issue(self, issue: Issue) -> None:
        """Report an engine issue at the severity its kind implies."""

        if issue.is_error:
            self.fail(issue.message)
        else:
            self.warn(issue.message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload; ``key=value`` pairs are highlighted.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in _KEY_VALUE_RE.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)

    def _status(self, message: str, *, glyph: str, style: str) -> None:
        prefix = glyph if self.use_emoji else ""
        self.console.print(Text(f"{prefix}{message}", style=style))


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, emoji=emoji, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


@dataclass(slots=True)
class CLIContext:
    """State shared by every command of one invocation."""

    config: UdepsConfig
    logger: CLILogger


def get_cli_context(ctx: typer.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the application callback.

    Raises:
        CLIError: When the callback did not run.
    """

    state = ctx.find_object(CLIContext)
    if state is None:
        raise CLIError("udeps configuration was not loaded")
    return state


__all__ = [
    "CLIContext",
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "get_cli_context",
]
