"""FastAPI application exposing the EditService over HTTP.

Every POST answers with the freshly rendered ``#content`` fragment. A
rejected edit (unknown key, dangling reference) still answers 200 with
the unchanged state plus an inline error banner; only storage failures
become a 500.

Handlers are plain ``def`` functions, so FastAPI runs each request in
its worker thread pool. Consistency across concurrent requests is the
EditService's lock, not anything here.

Run with::

    linkctl serve
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from linkctl import __version__
from linkctl.domain.document import Document
from linkctl.domain.errors import StorageError
from linkctl.services.edit import EditService
from linkctl.services.result import ServiceResult
from linkctl.web.views import Renderer, parse_sort

logger = logging.getLogger(__name__)


def create_app(service: EditService, *, template_root: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application around *service*.

    *template_root* points at a directory whose ``templates/`` folder
    overrides the packaged templates.
    """
    app = FastAPI(title="linkctl", version=__version__, docs_url=None, redoc_url=None)
    renderer = Renderer(override_root=template_root)
    app.state.service = service

    def render(result: ServiceResult, *, sort: str = "name") -> HTMLResponse:
        document = result.document or Document()
        error = None if result.ok or result.error is None else result.error.message
        return HTMLResponse(renderer.content(document, sort=sort, error=error))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> PlainTextResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=500)

    # ── Views ────────────────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    def index(sort: str | None = None) -> HTMLResponse:
        result = service.snapshot()
        document = result.document or Document()
        return HTMLResponse(renderer.page(document, sort=parse_sort(sort)))

    @app.get("/content", response_class=HTMLResponse)
    def content(sort: str | None = None) -> HTMLResponse:
        return render(service.snapshot(), sort=parse_sort(sort))

    # ── Add ──────────────────────────────────────────────────────────

    @app.post("/add/link", response_class=HTMLResponse)
    def add_link(name: str = Form(""), url: str = Form("")) -> HTMLResponse:
        return render(service.add_link(name, url))

    @app.post("/add/alias", response_class=HTMLResponse)
    def add_alias(alias: str = Form(""), target: str = Form("")) -> HTMLResponse:
        return render(service.add_alias(alias, target))

    @app.post("/add/group", response_class=HTMLResponse)
    def add_group(name: str = Form(""), entries: str = Form("")) -> HTMLResponse:
        return render(service.add_group(name, entries))

    # ── Delete ───────────────────────────────────────────────────────

    @app.post("/delete/link/{name:path}", response_class=HTMLResponse)
    def delete_link(name: str) -> HTMLResponse:
        return render(service.delete_link(name))

    @app.post("/delete/alias/{name:path}", response_class=HTMLResponse)
    def delete_alias(name: str) -> HTMLResponse:
        return render(service.delete_alias(name))

    @app.post("/delete/group/{name:path}", response_class=HTMLResponse)
    def delete_group(name: str) -> HTMLResponse:
        return render(service.delete_group(name))

    # ── Edit ─────────────────────────────────────────────────────────

    @app.post("/edit/link/{name:path}", response_class=HTMLResponse)
    def edit_link(
        name: str,
        new_name: str | None = Form(None),
        new_url: str | None = Form(None),
    ) -> HTMLResponse:
        return render(service.edit_link(name, new_name=new_name, new_url=new_url))

    @app.post("/edit/alias/{name:path}", response_class=HTMLResponse)
    def edit_alias(
        name: str,
        new_name: str | None = Form(None),
        new_target: str | None = Form(None),
    ) -> HTMLResponse:
        return render(service.edit_alias(name, new_name=new_name, new_target=new_target))

    @app.post("/edit/group/{name:path}", response_class=HTMLResponse)
    def edit_group(
        name: str,
        new_name: str | None = Form(None),
        new_entries: str | None = Form(None),
    ) -> HTMLResponse:
        return render(service.edit_group(name, new_name=new_name, new_entries=new_entries))

    return app
