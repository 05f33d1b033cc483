"""Document — the aliases/links/groups catalogue and its consistency rules.

Three independent namespaces:

- ``aliases``: alias name -> link name
- ``links``:   link name  -> URI (opaque, never validated as a URL)
- ``groups``:  group name -> ordered member names (aliases or links)

Invariants are *checked* by :meth:`Document.validate`, not enforced on
every write. The only cross-referential mutations are the two cascading
renames; plain inserts and deletes never cascade.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import TypeAdapter

from linkctl.domain.errors import NotFoundError


@dataclass
class Document:
    """The whole catalogue; also the unit of persistence."""

    aliases: dict[str, str] = field(default_factory=dict)
    links: dict[str, str] = field(default_factory=dict)
    groups: dict[str, list[str]] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Construction / serialization
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Build a Document from a parsed mapping.

        Missing sections default to empty, unknown sections are ignored.

        Raises:
            pydantic.ValidationError: If a section has the wrong shape.
        """
        return _DOCUMENT_ADAPTER.validate_python(data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def is_reference(self, name: str) -> bool:
        """True if *name* is an alias key or a link key."""
        return name in self.aliases or name in self.links

    def missing_entries(self, entries: Iterable[str]) -> list[str]:
        """Return the entries that are neither alias nor link keys, in order."""
        return [entry for entry in entries if not self.is_reference(entry)]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Scan for dangling aliases and dangling group entries.

        Returns human-readable warnings; an empty list means the document
        is consistent. Never raises.
        """
        warnings: list[str] = []

        for alias, target in self.aliases.items():
            if target not in self.links:
                warnings.append(f"alias '{alias}' points to '{target}' which is not in [links]")

        for group, entries in self.groups.items():
            for entry in entries:
                if not self.is_reference(entry):
                    warnings.append(
                        f"group '{group}' contains '{entry}' which is not in [aliases] or [links]"
                    )

        return warnings

    # ------------------------------------------------------------------
    # Cascading renames
    # ------------------------------------------------------------------

    def rename_link(self, old: str, new: str) -> None:
        """Rename a link key and retarget every alias that points at it.

        Raises:
            NotFoundError: If *old* is not a link key.
        """
        if old not in self.links:
            raise NotFoundError(f"link '{old}' not found", name=old)

        # Stage first so the document is untouched if anything below fails.
        retargeted = [alias for alias, target in self.aliases.items() if target == old]
        uri = self.links[old]

        del self.links[old]
        self.links[new] = uri
        for alias in retargeted:
            self.aliases[alias] = new

    def rename_alias(self, old: str, new: str) -> None:
        """Rename an alias key and rewrite every group entry that references it.

        Order and duplicate occurrences inside each group are preserved.

        Raises:
            NotFoundError: If *old* is not an alias key.
        """
        if old not in self.aliases:
            raise NotFoundError(f"alias '{old}' not found", name=old)

        rewritten = {
            group: [new if entry == old else entry for entry in entries]
            for group, entries in self.groups.items()
            if old in entries
        }
        target = self.aliases[old]

        del self.aliases[old]
        self.aliases[new] = target
        self.groups.update(rewritten)


_DOCUMENT_ADAPTER: TypeAdapter[Document] = TypeAdapter(Document)


def parse_entries(raw: str) -> list[str]:
    """Split a comma-separated member list, trimming and dropping empties."""
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def default_document() -> Document:
    """The document seeded on first initialization."""
    return Document(
        aliases={
            "alias1": "link1",
            "a1": "link1",
            "alias2": "link2",
            "a2": "link2",
        },
        links={
            "link1": "https://pypi.org/project/linkctl/",
            "link2": "https://docs.python.org/3/",
        },
        groups={"dev": ["alias1", "alias2"]},
    )
