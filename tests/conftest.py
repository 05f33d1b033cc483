"""Shared pytest fixtures for linkctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from linkctl.domain.document import Document
from linkctl.infrastructure.toml_storage import TomlStorage


def sample_document() -> Document:
    """A small consistent catalogue used across test modules."""
    return Document(
        aliases={"gh": "github", "py": "python-docs"},
        links={
            "github": "https://github.com",
            "python-docs": "https://docs.python.org/3/",
            "pypi": "https://pypi.org",
        },
        groups={"dev": ["gh", "py"], "all": ["gh", "pypi", "dev"]},
    )


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``~`` at a temp dir and clear every LINKCTL_* variable.

    Keeps tests from reading or seeding the real ``~/.config/linkctl``.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("EDITOR", raising=False)
    for key in list(os.environ):
        if key.startswith("LINKCTL_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lnk = logging.getLogger("linkctl")
    lnk_level = lnk.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lnk.setLevel(lnk_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def document() -> Document:
    """A fresh copy of :func:`sample_document`."""
    return sample_document()


@pytest.fixture
def links_path(tmp_path: Path) -> Path:
    """Location of the links file; the file itself does not exist yet."""
    return tmp_path / "links" / "config.toml"


@pytest.fixture
def storage(links_path: Path) -> TomlStorage:
    """TOML storage on an empty temp location."""
    return TomlStorage(links_path)


@pytest.fixture
def seeded_storage(storage: TomlStorage) -> TomlStorage:
    """TOML storage holding :func:`sample_document`."""
    storage.save(sample_document())
    return storage


@pytest.fixture
def _isolated_links(
    seeded_storage: TomlStorage, monkeypatch: pytest.MonkeyPatch
) -> TomlStorage:
    """Route the CLI to the seeded links file via ``LINKCTL_LINKS_PATH``.

    Use via ``@pytest.mark.usefixtures("_isolated_links")`` on command
    test classes; tests that need the storage can request
    ``seeded_storage`` directly (pytest deduplicates).
    """
    monkeypatch.setenv("LINKCTL_LINKS_PATH", str(seeded_storage.path))
    return seeded_storage


@pytest.fixture
def opened(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Capture URIs instead of launching them."""
    launched: list[str] = []

    def fake_launch(url: str, wait: bool = False, locate: bool = False) -> int:
        launched.append(url)
        return 0

    monkeypatch.setattr("click.launch", fake_launch)
    return launched
