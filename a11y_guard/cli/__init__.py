"""Command-line interface and terminal/JSON reporters."""

from .main import cli, main
from .reporter import CLIReporter, JSONReporter

__all__ = [
    "CLIReporter",
    "JSONReporter",
    "cli",
    "main",
]
