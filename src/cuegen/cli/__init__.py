"""Command line interface for cuegen."""

from cuegen.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
