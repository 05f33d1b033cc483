"""serve — run the local web editor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkctl.commands._base import LinkCommand

if TYPE_CHECKING:
    from linkctl.commands._context import AppContext


@click.command(
    cls=LinkCommand,
    examples="""\
  # Serve on the configured address (default 127.0.0.1:1414) and open a browser
  linkctl serve

  # Custom port, no browser
  linkctl serve --port 9000 --no-browser""",
)
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Listen port (default from settings).")
@click.option(
    "--browser/--no-browser",
    "open_browser",
    default=None,
    help="Open the editor in the default browser on start.",
)
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None, open_browser: bool | None) -> None:
    """Serve the catalogue editor over HTTP (Ctrl+C to stop)."""
    import uvicorn

    from linkctl.domain.errors import ExternalProcessError
    from linkctl.infrastructure.launcher import open_uri
    from linkctl.services.edit import EditService
    from linkctl.web.app import create_app

    server = app.settings.server
    host = host or server.host
    port = port or server.port
    if open_browser is None:
        open_browser = server.open_browser

    web_app = create_app(EditService(app.storage))
    url = f"http://{host}:{port}"
    click.echo(f"linkctl web editor: {url}")

    if open_browser:
        try:
            open_uri(url)
        except ExternalProcessError as exc:
            click.echo(f"WARNING: {exc.message}", err=True)

    uvicorn.run(web_app, host=host, port=port, log_config=None)
