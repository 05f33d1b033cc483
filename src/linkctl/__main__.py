"""Allow ``python -m linkctl``."""

from linkctl.cli import cli

cli()
