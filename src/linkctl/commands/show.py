"""Commands: show the catalogue and check its integrity."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext


@click.command(
    cls=LinkCommand,
    examples="""\
  linkctl show
  linkctl show --sort url
  linkctl --json show""",
)
@click.option(
    "--sort",
    type=click.Choice(["name", "url"]),
    default="name",
    help="Order aliases and links by name or by target/URL.",
)
@click.pass_obj
def show(app: AppContext, sort: str) -> None:
    """List all aliases, links, and groups."""
    from linkctl.services.catalogue import CatalogueService

    app.emit(CatalogueService(app.storage).show(sort=sort))  # type: ignore[arg-type]


@click.command(
    cls=LinkCommand,
    examples="""\
  linkctl check
  linkctl --json check""",
)
@click.option("--strict", is_flag=True, help="Exit non-zero when any issue is found.")
@click.pass_obj
def check(app: AppContext, strict: bool) -> None:
    """Report aliases and group entries that point at nothing."""
    from linkctl.services.catalogue import CatalogueService

    result = CatalogueService(app.storage).check()
    app.emit(result)
    if strict and not result.data.get("healthy", True):
        raise SystemExit(1)
