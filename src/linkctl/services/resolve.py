"""ResolveService — one-shot name resolution and batch opening.

Reads the store without taking the edit lock: saves replace the file
atomically, so a reader sees either the old or the new document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from linkctl.domain.errors import DanglingReferenceError, NotFoundError
from linkctl.domain.resolver import expand, open_all, resolve
from linkctl.infrastructure.launcher import open_uri
from linkctl.services.base import BaseService
from linkctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ResolveService(BaseService):
    """Resolve names to URIs and open them."""

    def resolve(self, name: str) -> ServiceResult:
        """Resolve a single alias or link name without opening it."""
        op = "resolve"
        document = self._storage.load()
        try:
            uri = resolve(name, document)
        except DanglingReferenceError as exc:
            return self._failure(op, exc, name=exc.name, target=exc.target)
        except NotFoundError as exc:
            return self._failure(op, exc, name=exc.name)
        return ServiceResult(ok=True, op=op, data={"name": name, "uri": uri})

    def expand(self, names: Sequence[str]) -> ServiceResult:
        """Show what *names* expand to, without resolving anything."""
        document = self._storage.load()
        return ServiceResult(
            ok=True,
            op="expand",
            data={"names": list(names), "expanded": expand(names, document)},
        )

    def open(
        self,
        names: Sequence[str],
        *,
        opener: Callable[[str], None] = open_uri,
    ) -> ServiceResult:
        """Expand groups, resolve, and open every name.

        Partial failure is still success: each failing name becomes a
        ``skipping`` warning and the rest of the batch carries on.
        """
        document = self._storage.load()
        outcomes = open_all(names, document, opener)

        warnings: list[str] = []
        for outcome in outcomes:
            if outcome.ok:
                logger.debug("Opened %s -> %s", outcome.name, outcome.uri)
            else:
                warnings.append(f"skipping {outcome.name}: {outcome.reason}")

        opened = sum(1 for outcome in outcomes if outcome.ok)
        return ServiceResult(
            ok=True,
            op="open",
            data={
                "outcomes": [outcome.to_dict() for outcome in outcomes],
                "opened": opened,
                "failed": len(outcomes) - opened,
            },
            warnings=warnings,
        )
