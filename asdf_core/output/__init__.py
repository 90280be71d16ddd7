"""Output formatting for the CLI and services."""

from .console import ConsoleProtocol, MockConsole, NullConsole, RichConsole, Style

__all__ = ["ConsoleProtocol", "MockConsole", "NullConsole", "RichConsole", "Style"]
