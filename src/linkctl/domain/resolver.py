"""Name resolution — turn requested names into URIs.

Pure functions over a :class:`~linkctl.domain.document.Document`. The
only side effect lives in :func:`open_all`, which hands each URI to an
injected opener so callers decide how (and whether) anything is launched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from linkctl.domain.document import Document
from linkctl.domain.errors import DanglingReferenceError, LinkctlError, NotFoundError


@dataclass(frozen=True)
class OpenOutcome:
    """Result of attempting to open one expanded name."""

    name: str
    ok: bool
    uri: str | None = None
    reason: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "name": self.name,
            "ok": self.ok,
            "uri": self.uri,
            "reason": self.reason,
            "code": self.code,
        }


def resolve(name: str, document: Document) -> str:
    """Resolve *name* to a URI.

    Aliases take priority over direct links. An alias whose target is
    missing is an error; it never falls through to a direct lookup of
    *name* itself.

    Raises:
        DanglingReferenceError: *name* is an alias whose target is not a link.
        NotFoundError: *name* is neither an alias nor a link.
    """
    if name in document.aliases:
        target = document.aliases[name]
        if target not in document.links:
            msg = f"alias '{name}' points to '{target}' which is not in [links]"
            raise DanglingReferenceError(msg, name=name, target=target)
        return document.links[target]

    if name in document.links:
        return document.links[name]

    raise NotFoundError(f"'{name}' not found in [aliases] or [links]", name=name)


def try_resolve(name: str, document: Document) -> str | None:
    """Like :func:`resolve` but returns None instead of raising."""
    try:
        return resolve(name, document)
    except (DanglingReferenceError, NotFoundError):
        return None


def expand(names: Iterable[str], document: Document) -> list[str]:
    """Replace group names with their members, one level deep.

    Members are appended verbatim; a member that is itself a group name
    is not expanded again.
    """
    expanded: list[str] = []
    for name in names:
        members = document.groups.get(name)
        if members is not None:
            expanded.extend(members)
        else:
            expanded.append(name)
    return expanded


def open_all(
    names: Iterable[str],
    document: Document,
    opener: Callable[[str], None],
) -> list[OpenOutcome]:
    """Expand, resolve, and open every name, reporting each outcome.

    One failing name never stops the batch. *opener* signals failure by
    raising a :class:`~linkctl.domain.errors.LinkctlError`.
    """
    outcomes: list[OpenOutcome] = []
    for name in expand(names, document):
        try:
            uri = resolve(name, document)
        except LinkctlError as exc:
            outcomes.append(OpenOutcome(name=name, ok=False, reason=exc.message, code=exc.code))
            continue

        try:
            opener(uri)
        except LinkctlError as exc:
            outcomes.append(
                OpenOutcome(name=name, ok=False, uri=uri, reason=exc.message, code=exc.code)
            )
            continue

        outcomes.append(OpenOutcome(name=name, ok=True, uri=uri))
    return outcomes
