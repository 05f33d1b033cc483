"""Subcommand modules for linkctl.

Provides register_commands() which uses deferred imports to keep
``linkctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    3 groups (add/edit/delete) + 8 standalone commands.
    """
    # --- Groups ---
    from linkctl.commands.crud import add, delete, edit

    cli.add_command(add)
    cli.add_command(edit)
    cli.add_command(delete)

    # --- Standalone commands ---
    from linkctl.commands.config_cmd import config_cmd
    from linkctl.commands.init_cmd import init_cmd
    from linkctl.commands.open_cmd import expand, open_cmd, resolve
    from linkctl.commands.serve import serve
    from linkctl.commands.show import check, show

    cli.add_command(open_cmd)
    cli.add_command(resolve)
    cli.add_command(expand)
    cli.add_command(show)
    cli.add_command(check)
    cli.add_command(init_cmd)
    cli.add_command(config_cmd)
    cli.add_command(serve)
