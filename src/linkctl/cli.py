"""Root CLI group for linkctl with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from linkctl import __version__
from linkctl.commands import register_commands
from linkctl.commands._base import LinkGroup
from linkctl.commands._context import AppContext
from linkctl.config.settings import LinkSettings


class OpenByDefaultGroup(LinkGroup):
    """Treat an unknown first word as a name to open.

    ``linkctl gh dev`` is shorthand for ``linkctl open gh dev``. Names
    that collide with a subcommand need the explicit ``open``.
    """

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return "open", self.get_command(ctx, "open"), args
        return super().resolve_command(ctx, args)


@click.group(
    cls=OpenByDefaultGroup,
    invoke_without_command=True,
    examples="""\
  linkctl                   # list the catalogue
  linkctl gh dev            # open alias 'gh' and every member of group 'dev'
  linkctl add link rust https://rust-lang.org
  linkctl serve""",
)
@click.version_option(version=__version__, prog_name="linkctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override links file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """linkctl — bookmarks in your terminal.

    Names resolve through aliases to links; groups open several at once.
    Run without a command to list everything.
    """
    ctx.ensure_object(dict)
    flags: dict[str, Any] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    settings = LinkSettings.from_cli(links_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from linkctl.services.catalogue import CatalogueService

        ctx.obj.emit(CatalogueService(ctx.obj.storage).show())


register_commands(cli)
