"""Storage — backend-agnostic persistence for the catalogue document.

The whole :class:`~linkctl.domain.document.Document` is the unit of
persistence: ``save`` replaces whatever was stored, there is no
diff/patch path. Services only ever talk to this interface, so a new
backend (an embedded database, say) plugs in via :func:`create_storage`
without touching the domain or service layers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkctl.config.settings import LinkSettings
    from linkctl.domain.document import Document


class Storage(ABC):
    """Capability set every backend implements."""

    @abstractmethod
    def initialize(self) -> bool:
        """Create the store with the seeded default document if absent.

        Never overwrites an existing store. Returns True if it created one.
        """

    @abstractmethod
    def load(self) -> Document:
        """Load the full document.

        Raises:
            ParseError: The stored content is malformed.
            StorageIOError: The store could not be read.
        """

    @abstractmethod
    def save(self, document: Document) -> None:
        """Persist *document*, replacing the stored one.

        Raises:
            StorageIOError: The store could not be written.
        """

    @abstractmethod
    def backend_name(self) -> str:
        """Human-readable backend name (``"toml"``, ...)."""

    def location(self) -> Path | None:
        """Where the store lives, if it is file-based."""
        return None


def create_storage(settings: LinkSettings) -> Storage:
    """Build the backend selected by ``settings.storage.backend``."""
    backend = settings.storage.backend
    if backend == "toml":
        from linkctl.infrastructure.toml_storage import TomlStorage

        return TomlStorage(settings.resolved_links_path())

    msg = f"Unknown storage backend: {backend!r}"
    raise ValueError(msg)
