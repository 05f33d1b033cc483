"""Command: links file initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  linkctl init
  linkctl -c ~/dotfiles/links.toml init"""


@click.command("init", cls=LinkCommand, examples=_INIT_EXAMPLES)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the links file with a starter catalogue (never overwrites)."""
    from linkctl.services.catalogue import CatalogueService

    app.emit(CatalogueService(app.open_storage(initialize=False)).init())
