"""Commands: open, resolve, and expand names (open_cmd avoids shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext


@click.command(
    "open",
    cls=LinkCommand,
    examples="""\
  linkctl open gh
  linkctl open dev docs
  linkctl gh dev            # 'open' is implied for unknown words
  linkctl --json open dev""",
)
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def open_cmd(app: AppContext, names: tuple[str, ...]) -> None:
    """Open aliases, links, or whole groups in the default handler.

    A name that cannot be resolved is skipped with a warning; the rest
    are still opened.
    """
    from linkctl.services.resolve import ResolveService

    app.emit(ResolveService(app.storage).open(list(names)))


@click.command(
    cls=LinkCommand,
    examples="""\
  linkctl resolve gh
  xdg-open "$(linkctl -q resolve gh)\"""",
)
@click.argument("name")
@click.pass_obj
def resolve(app: AppContext, name: str) -> None:
    """Print the URI an alias or link resolves to, without opening it."""
    from linkctl.services.resolve import ResolveService

    app.emit(ResolveService(app.storage).resolve(name))


@click.command(
    cls=LinkCommand,
    examples="""\
  linkctl expand dev
  linkctl expand dev gh""",
)
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def expand(app: AppContext, names: tuple[str, ...]) -> None:
    """Show what names expand to once groups are flattened (one level)."""
    from linkctl.services.resolve import ResolveService

    app.emit(ResolveService(app.storage).expand(list(names)))
