"""CatalogueService — store lifecycle and whole-document views.

Covers initialization, listing, integrity checking, and handing the
links file to the user's editor.
"""

from __future__ import annotations

from typing import Literal

from linkctl.domain.errors import ExternalProcessError
from linkctl.infrastructure.launcher import resolve_editor, run_editor
from linkctl.services.base import BaseService
from linkctl.services.result import ServiceError, ServiceResult

SortField = Literal["name", "url"]


class CatalogueService(BaseService):
    """Initialize, show, check, and hand-edit the catalogue."""

    def init(self) -> ServiceResult:
        """Seed the store with the default document if it does not exist."""
        created = self._storage.initialize()
        return ServiceResult(
            ok=True,
            op="init",
            data={"created": created, **self._storage_meta()},
        )

    def show(self, *, sort: SortField = "name") -> ServiceResult:
        """The full document plus per-section counts."""
        document = self._storage.load()
        return ServiceResult(
            ok=True,
            op="show",
            data={
                "document": document.to_dict(),
                "sort": sort,
                "counts": {
                    "links": len(document.links),
                    "aliases": len(document.aliases),
                    "groups": len(document.groups),
                },
            },
            meta=self._storage_meta(),
        )

    def check(self) -> ServiceResult:
        """Report dangling aliases and dangling group entries."""
        issues = self._storage.load().validate()
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": issues,
                "count": len(issues),
                "healthy": not issues,
            },
            meta=self._storage_meta(),
        )

    def edit_file(self, *, editor: str | None = None) -> ServiceResult:
        """Open the links file in an external editor and wait for it."""
        op = "edit_file"
        location = self._storage.location()
        if location is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_EDITABLE",
                    message=f"{self._storage.backend_name()} storage has no file to edit",
                ),
            )

        command = resolve_editor(editor)
        try:
            run_editor(location, command)
        except ExternalProcessError as exc:
            return self._failure(op, exc, editor=command)

        # Re-read so the user hears about anything they just broke.
        issues = self._storage.load().validate()
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(location), "editor": command},
            warnings=issues,
        )
