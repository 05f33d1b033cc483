"""Command: open the links file in an external editor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext


@click.command(
    "config",
    cls=LinkCommand,
    examples="""\
  linkctl config
  EDITOR=nano linkctl config
  linkctl config --editor "code --wait\"""",
)
@click.option("--editor", default=None, help="Editor command (default: $EDITOR, then vi).")
@click.pass_obj
def config_cmd(app: AppContext, editor: str | None) -> None:
    """Edit the links file by hand."""
    from linkctl.services.catalogue import CatalogueService

    command = editor or app.settings.editor.command
    app.emit(CatalogueService(app.storage).edit_file(editor=command))
