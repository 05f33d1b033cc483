"""TOML file backend.

Layout::

    [aliases]
    gh = "github"

    [links]
    github = "https://github.com"

    [groups]
    dev = ["gh"]

Comments and key order are not preserved across a save. Writes go to a
sibling temp file that is then renamed over the target, so readers never
observe a half-written file. When the path is a symlink the rename lands
on the file it points at, leaving the link in place.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from linkctl.config.discovery import default_links_path
from linkctl.domain.document import Document, default_document
from linkctl.domain.errors import ParseError, StorageIOError
from linkctl.infrastructure.storage import Storage

logger = logging.getLogger(__name__)

_HEADER = "# linkctl links file\n"


class TomlStorage(Storage):
    """Store the document as a single TOML file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def with_default_path(cls) -> TomlStorage:
        return cls(default_links_path())

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Storage API
    # ------------------------------------------------------------------

    def initialize(self) -> bool:
        if self._path.exists():
            return False
        logger.debug("Seeding default links file at %s", self._path)
        self._write(_HEADER + tomli_w.dumps(default_document().to_dict()))
        return True

    def load(self) -> Document:
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            msg = f"Failed to read links file {self._path}: {exc}"
            raise StorageIOError(msg) from exc

        try:
            data = tomllib.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            msg = f"Failed to parse links file {self._path}: {exc}"
            raise ParseError(msg) from exc

        try:
            document = Document.from_dict(data)
        except ValidationError as exc:
            msg = f"Invalid links file {self._path}: {exc.error_count()} problem(s): {exc}"
            raise ParseError(msg) from exc

        for warning in document.validate():
            logger.warning("%s", warning)

        return document

    def save(self, document: Document) -> None:
        self._write(tomli_w.dumps(document.to_dict()))

    def backend_name(self) -> str:
        return "toml"

    def location(self) -> Path | None:
        return self._path

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, contents: str) -> None:
        """Atomically replace the file with *contents*.

        A symlinked links file is written through to its target, and an
        existing file keeps its permission bits.
        """
        tmp_name: str | None = None
        try:
            target = self._path.resolve()
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(contents)
            if target.exists():
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            msg = f"Failed to write links file {self._path}: {exc}"
            raise StorageIOError(msg) from exc
