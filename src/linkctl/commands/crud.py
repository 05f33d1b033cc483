"""Command groups: add, edit, and delete links, aliases, and groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkGroup
from linkctl.services.edit import EditService

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext


# ── add ──────────────────────────────────────────────────────────────


@click.group(
    cls=LinkGroup,
    examples="""\
  linkctl add link github https://github.com
  linkctl add alias gh github
  linkctl add group dev gh,docs""",
)
def add() -> None:
    """Add a link, alias, or group (existing keys are replaced)."""


@add.command("link")
@click.argument("name")
@click.argument("url")
@click.pass_obj
def add_link(app: AppContext, name: str, url: str) -> None:
    """Add a link NAME pointing at URL."""
    app.emit(EditService(app.storage).add_link(name, url))


@add.command("alias")
@click.argument("alias")
@click.argument("target")
@click.pass_obj
def add_alias(app: AppContext, alias: str, target: str) -> None:
    """Add ALIAS for the existing link TARGET."""
    app.emit(EditService(app.storage).add_alias(alias, target))


@add.command("group")
@click.argument("name")
@click.argument("entries", nargs=-1, required=True)
@click.pass_obj
def add_group(app: AppContext, name: str, entries: tuple[str, ...]) -> None:
    """Add group NAME of existing aliases/links (space- or comma-separated)."""
    app.emit(EditService(app.storage).add_group(name, ",".join(entries)))


# ── edit ─────────────────────────────────────────────────────────────


@click.group(
    cls=LinkGroup,
    examples="""\
  linkctl edit link github --url https://github.com/settings
  linkctl edit link github --name gh-link      # aliases follow
  linkctl edit alias gh --target gitlab
  linkctl edit alias gh --name g                # groups follow
  linkctl edit group dev --entries gh,docs --name work""",
)
def edit() -> None:
    """Change or rename a link, alias, or group; references follow renames."""


@edit.command("link")
@click.argument("name")
@click.option("--name", "new_name", default=None, help="Rename the link.")
@click.option("--url", "new_url", default=None, help="Point the link at a new URL.")
@click.pass_obj
def edit_link(app: AppContext, name: str, new_name: str | None, new_url: str | None) -> None:
    """Edit link NAME."""
    app.emit(EditService(app.storage).edit_link(name, new_name=new_name, new_url=new_url))


@edit.command("alias")
@click.argument("name")
@click.option("--name", "new_name", default=None, help="Rename the alias.")
@click.option("--target", "new_target", default=None, help="Retarget to an existing link.")
@click.pass_obj
def edit_alias(app: AppContext, name: str, new_name: str | None, new_target: str | None) -> None:
    """Edit alias NAME."""
    app.emit(EditService(app.storage).edit_alias(name, new_name=new_name, new_target=new_target))


@edit.command("group")
@click.argument("name")
@click.option("--name", "new_name", default=None, help="Rename the group.")
@click.option("--entries", "new_entries", default=None, help="Comma-separated members.")
@click.pass_obj
def edit_group(
    app: AppContext, name: str, new_name: str | None, new_entries: str | None
) -> None:
    """Edit group NAME."""
    app.emit(
        EditService(app.storage).edit_group(name, new_name=new_name, new_entries=new_entries)
    )


# ── delete ───────────────────────────────────────────────────────────


@click.group(
    cls=LinkGroup,
    examples="""\
  linkctl delete link github
  linkctl delete alias gh
  linkctl delete group dev""",
)
def delete() -> None:
    """Delete a link, alias, or group. References to it are left dangling."""


@delete.command("link")
@click.argument("name")
@click.pass_obj
def delete_link(app: AppContext, name: str) -> None:
    """Delete link NAME."""
    app.emit(EditService(app.storage).delete_link(name))


@delete.command("alias")
@click.argument("name")
@click.pass_obj
def delete_alias(app: AppContext, name: str) -> None:
    """Delete alias NAME."""
    app.emit(EditService(app.storage).delete_alias(name))


@delete.command("group")
@click.argument("name")
@click.pass_obj
def delete_group(app: AppContext, name: str) -> None:
    """Delete group NAME."""
    app.emit(EditService(app.storage).delete_group(name))
