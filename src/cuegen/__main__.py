"""Allow running as `python -m cuegen`."""

from cuegen.cli.main import cli_entrypoint

cli_entrypoint()
