"""EditService — concurrent-safe CRUD over the catalogue document.

Pipeline per operation: LOAD → VALIDATE → MUTATE → SAVE → RENDER

The service owns one lock. Every operation holds it across the full
load-mutate-save round trip, so two edits never interleave and none is
lost; loading outside the lock would reintroduce lost updates. There is
no cached document between operations: each one re-reads the store.

Referential checks are asymmetric on purpose:

- add/edit reject anything that would create a dangling alias or group
  entry (``VALIDATION_FAILED``), before mutating;
- delete never cascades, so deleting a link can leave dangling aliases.
  Those surface as warnings and as resolve-time errors.

``NOT_FOUND`` and ``VALIDATION_FAILED`` come back as failed results
carrying the unchanged document. Storage errors propagate; nothing is
written in that case and the lock is released.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from linkctl.domain.document import Document, parse_entries
from linkctl.domain.errors import NotFoundError, ValidationFailedError
from linkctl.services.base import BaseService
from linkctl.services.result import ServiceResult

if TYPE_CHECKING:
    from linkctl.infrastructure.storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class _Change:
    """What a mutation reports back to the transaction."""

    fields: dict[str, Any] = field(default_factory=dict)
    changed: bool = True


class EditService(BaseService):
    """Add, edit, rename, and delete links, aliases, and groups."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def snapshot(self) -> ServiceResult:
        """Render the current document (read under the lock)."""
        return self._transact("show", lambda document: _Change(changed=False))

    # ------------------------------------------------------------------
    # Add
    # ------------------------------------------------------------------

    def add_link(self, name: str, url: str) -> ServiceResult:
        """Upsert a link. No referential checks."""
        name, url = name.strip(), url.strip()

        def apply(document: Document) -> _Change:
            if not name or not url:
                raise ValidationFailedError("link name and url are required")
            document.links[name] = url
            return _Change({"name": name, "url": url})

        return self._transact("add_link", apply)

    def add_alias(self, alias: str, target: str) -> ServiceResult:
        """Upsert an alias; *target* must already be a link."""
        alias, target = alias.strip(), target.strip()

        def apply(document: Document) -> _Change:
            if not alias or not target:
                raise ValidationFailedError("alias name and target are required")
            _require_link_target(document, target)
            document.aliases[alias] = target
            return _Change({"alias": alias, "target": target})

        return self._transact("add_alias", apply)

    def add_group(self, name: str, entries: str) -> ServiceResult:
        """Upsert a group from a comma-separated member list.

        Every member must be an existing alias or link.
        """
        name = name.strip()
        members = parse_entries(entries)

        def apply(document: Document) -> _Change:
            if not name:
                raise ValidationFailedError("group name is required")
            _require_members(document, members)
            document.groups[name] = members
            return _Change({"name": name, "entries": members})

        return self._transact("add_group", apply)

    # ------------------------------------------------------------------
    # Delete (never cascades)
    # ------------------------------------------------------------------

    def delete_link(self, name: str) -> ServiceResult:
        return self._transact("delete_link", _deleter("links", name))

    def delete_alias(self, name: str) -> ServiceResult:
        return self._transact("delete_alias", _deleter("aliases", name))

    def delete_group(self, name: str) -> ServiceResult:
        return self._transact("delete_group", _deleter("groups", name))

    # ------------------------------------------------------------------
    # Edit / rename
    # ------------------------------------------------------------------

    def edit_link(
        self,
        name: str,
        *,
        new_name: str | None = None,
        new_url: str | None = None,
    ) -> ServiceResult:
        """Change a link's URL and/or rename it (retargeting its aliases)."""
        new_name = _blank_to_none(new_name)
        new_url = _blank_to_none(new_url)

        def apply(document: Document) -> _Change:
            if name not in document.links:
                raise NotFoundError(f"link '{name}' not found", name=name)

            fields_changed: list[str] = []
            if new_url is not None:
                document.links[name] = new_url
                fields_changed.append("url")
            if new_name is not None and new_name != name:
                document.rename_link(name, new_name)
                fields_changed.append("name")
            return _Change(
                {"name": new_name or name, "fields_changed": fields_changed},
                changed=bool(fields_changed),
            )

        return self._transact("edit_link", apply)

    def edit_alias(
        self,
        name: str,
        *,
        new_name: str | None = None,
        new_target: str | None = None,
    ) -> ServiceResult:
        """Retarget an alias and/or rename it (rewriting group entries)."""
        new_name = _blank_to_none(new_name)
        new_target = _blank_to_none(new_target)

        def apply(document: Document) -> _Change:
            if name not in document.aliases:
                raise NotFoundError(f"alias '{name}' not found", name=name)
            if new_target is not None:
                _require_link_target(document, new_target)

            fields_changed: list[str] = []
            if new_target is not None:
                document.aliases[name] = new_target
                fields_changed.append("target")
            if new_name is not None and new_name != name:
                document.rename_alias(name, new_name)
                fields_changed.append("name")
            return _Change(
                {"name": new_name or name, "fields_changed": fields_changed},
                changed=bool(fields_changed),
            )

        return self._transact("edit_alias", apply)

    def edit_group(
        self,
        name: str,
        *,
        new_name: str | None = None,
        new_entries: str | None = None,
    ) -> ServiceResult:
        """Replace a group's members and/or move it under a new name."""
        new_name = _blank_to_none(new_name)
        members = parse_entries(new_entries) if _blank_to_none(new_entries) else None

        def apply(document: Document) -> _Change:
            if name not in document.groups:
                raise NotFoundError(f"group '{name}' not found", name=name)
            if members is not None:
                _require_members(document, members)

            fields_changed: list[str] = []
            if members is not None:
                document.groups[name] = members
                fields_changed.append("entries")
            if new_name is not None and new_name != name:
                document.groups[new_name] = document.groups.pop(name)
                fields_changed.append("name")
            return _Change(
                {"name": new_name or name, "fields_changed": fields_changed},
                changed=bool(fields_changed),
            )

        return self._transact("edit_group", apply)

    # ------------------------------------------------------------------
    # Transaction
    # ------------------------------------------------------------------

    def _transact(self, op: str, apply: Callable[[Document], _Change]) -> ServiceResult:
        """Run *apply* against a freshly loaded document while holding the lock.

        *apply* must do all of its checks before its first mutation.
        """
        with self._lock:
            document = self._storage.load()
            try:
                change = apply(document)
            except (NotFoundError, ValidationFailedError) as exc:
                return self._failure(op, exc, document=document)

            if change.changed:
                self._storage.save(document)
                logger.debug("%s committed: %s", op, change.fields)

            return ServiceResult(
                ok=True,
                op=op,
                data={**change.fields, "document": document.to_dict()},
                warnings=document.validate() if change.changed else [],
            )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require_link_target(document: Document, target: str) -> None:
    if target not in document.links:
        msg = f"alias target '{target}' does not exist in links"
        raise ValidationFailedError(msg)


def _require_members(document: Document, members: list[str]) -> None:
    if not members:
        raise ValidationFailedError("group needs at least one entry")
    missing = document.missing_entries(members)
    if missing:
        raise ValidationFailedError(f"group entries not found: {', '.join(missing)}")


def _deleter(section: str, name: str) -> Callable[[Document], _Change]:
    def apply(document: Document) -> _Change:
        mapping: dict[str, Any] = getattr(document, section)
        deleted = mapping.pop(name, None) is not None
        return _Change({"name": name, "deleted": deleted}, changed=deleted)

    return apply
