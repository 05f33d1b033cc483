"""View models and HTML rendering for the web app.

Rows are plain frozen dataclasses; all markup lives in the Jinja2
templates under ``linkctl/templates/web/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment

from linkctl.domain.document import Document
from linkctl.domain.resolver import try_resolve
from linkctl.infrastructure.templates import build_template_environment

SORT_FIELDS = ("name", "url")


@dataclass(frozen=True)
class LinkRow:
    name: str
    url: str


@dataclass(frozen=True)
class AliasRow:
    alias: str
    target: str
    url: str | None  # None when the alias is dangling


@dataclass(frozen=True)
class GroupEntry:
    name: str
    url: str | None


@dataclass(frozen=True)
class GroupRow:
    name: str
    entries: tuple[GroupEntry, ...]

    @property
    def raw_entries(self) -> str:
        return ", ".join(entry.name for entry in self.entries)

    @property
    def urls(self) -> list[str]:
        """Resolved URLs for "open all"; unresolvable entries are left out."""
        return [entry.url for entry in self.entries if entry.url is not None]


def parse_sort(value: str | None) -> str:
    """Anything other than ``url`` sorts by name."""
    return "url" if value == "url" else "name"


def build_rows(document: Document, *, sort: str = "name") -> dict[str, Any]:
    """Sorted rows for each section."""
    by_url = sort == "url"

    links = [LinkRow(name, url) for name, url in document.links.items()]
    links.sort(key=lambda row: row.url if by_url else row.name)

    aliases = [
        AliasRow(alias, target, document.links.get(target))
        for alias, target in document.aliases.items()
    ]
    aliases.sort(key=lambda row: row.target if by_url else row.alias)

    groups = [
        GroupRow(
            name,
            tuple(GroupEntry(entry, try_resolve(entry, document)) for entry in entries),
        )
        for name, entries in sorted(document.groups.items())
    ]

    return {"links": links, "aliases": aliases, "groups": groups}


class Renderer:
    """Renders the full page and the swappable ``#content`` fragment."""

    def __init__(self, *, override_root: Path | None = None) -> None:
        self._env: Environment = build_template_environment("web", override_root=override_root)

    def content(self, document: Document, *, sort: str = "name", error: str | None = None) -> str:
        template = self._env.get_template("content.html")
        return template.render(sort=sort, error=error, **build_rows(document, sort=sort))

    def page(self, document: Document, *, sort: str = "name", error: str | None = None) -> str:
        template = self._env.get_template("page.html")
        return template.render(content=self.content(document, sort=sort, error=error))
