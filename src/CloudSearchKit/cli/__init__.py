"""CLI package for CloudSearchKit.

Contains the click interface, the command runner, and the command
implementations behind each subcommand.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from CloudSearchKit.cli.runner import CommandRunner
from CloudSearchKit.cli.ui import cli


def main() -> None:
    """Run the CloudSearchKit CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
