"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult for every
outcome the caller can recover from. Only storage failures escape as
exceptions. The CLI and the web app both consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from linkctl.domain.document import Document


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_alias"``).
        data: Operation-specific payload. Edit operations and ``show``
            always include the full current ``document`` (as a plain
            mapping, so it serializes with the rest), on failure as well.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (backend, location, ...).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def document(self) -> Document | None:
        """The ``document`` payload rebuilt as a :class:`Document`, if any."""
        raw = self.data.get("document")
        if raw is None:
            return None
        return Document.from_dict(raw)
