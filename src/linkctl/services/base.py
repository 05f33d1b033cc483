"""BaseService — shared foundation for all linkctl services.

Every service receives a :class:`Storage` at construction time and goes
through it for all reads and writes of the catalogue document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from linkctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from linkctl.domain.document import Document
    from linkctl.domain.errors import LinkctlError
    from linkctl.infrastructure.storage import Storage

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve(self, name: str) -> ServiceResult:
                document = self._storage.load()
                ...
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage

    def _storage_meta(self) -> dict[str, Any]:
        location = self._storage.location()
        return {
            "backend": self._storage.backend_name(),
            "location": str(location) if location is not None else None,
        }

    @staticmethod
    def _failure(
        op: str,
        exc: LinkctlError,
        *,
        document: Document | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Turn a recoverable domain error into a failed ServiceResult."""
        logger.debug("%s failed: %s", op, exc.message)
        data: dict[str, Any] = {}
        if document is not None:
            data["document"] = document.to_dict()
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(code=exc.code, message=exc.message, detail=detail),
        )
