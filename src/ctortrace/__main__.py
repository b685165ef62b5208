"""Allow ``python -m ctortrace``."""

from ctortrace.cli.main import cli

cli()
