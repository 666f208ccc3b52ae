"""CLI package for the ADS client.

Split into the click interface, a runner that owns logging and the client
lifecycle, and the command implementations.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from AdsClient.cli.runner import CommandRunner
from AdsClient.cli.ui import cli


def main() -> None:
    """Run the ADS CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
