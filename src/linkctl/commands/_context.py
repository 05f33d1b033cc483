"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy storage initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from linkctl.config.settings import LinkSettings
    from linkctl.infrastructure.storage import Storage
    from linkctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. Storage is created
    lazily on first use so ``--help`` and ``--version`` never touch the
    links file.
    """

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        self._storage: Storage | None = None

        from linkctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def open_storage(self, *, initialize: bool = True) -> Storage:
        """The configured backend, seeded with the default document on first use."""
        if self._storage is None:
            from linkctl.config.logging import bind_storage_context
            from linkctl.infrastructure.storage import create_storage

            self._storage = create_storage(self.settings)
            bind_storage_context(self._storage.backend_name(), self._storage.location())
        if initialize:
            self._storage.initialize()
        return self._storage

    @property
    def storage(self) -> Storage:
        """The storage backend (created and initialized lazily)."""
        return self.open_storage()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
