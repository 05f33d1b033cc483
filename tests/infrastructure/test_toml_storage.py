"""Tests for the TOML storage backend."""

from __future__ import annotations

import logging
import stat
import tomllib
from pathlib import Path

import pytest

from linkctl.config.settings import LinkSettings
from linkctl.domain.document import Document, default_document
from linkctl.domain.errors import ParseError, StorageIOError
from linkctl.infrastructure.storage import Storage, create_storage
from linkctl.infrastructure.toml_storage import TomlStorage


class TestInitialize:
    def test_creates_file_with_default_document(self, storage: TomlStorage) -> None:
        assert storage.initialize() is True
        assert storage.path.is_file()
        assert storage.load() == default_document()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        storage = TomlStorage(tmp_path / "a" / "b" / "config.toml")
        storage.initialize()
        assert storage.path.is_file()

    def test_file_starts_with_header_comment(self, storage: TomlStorage) -> None:
        storage.initialize()
        assert storage.path.read_text(encoding="utf-8").startswith("# linkctl links file\n")

    def test_idempotent(self, storage: TomlStorage) -> None:
        storage.initialize()
        first = storage.path.read_bytes()
        assert storage.initialize() is False
        assert storage.path.read_bytes() == first

    def test_never_overwrites(self, storage: TomlStorage) -> None:
        storage.save(Document(links={"mine": "https://example.com"}))
        assert storage.initialize() is False
        assert storage.load().links == {"mine": "https://example.com"}


class TestRoundTrip:
    def test_sample_document(self, storage: TomlStorage, document: Document) -> None:
        storage.save(document)
        assert storage.load() == document

    def test_empty_document(self, storage: TomlStorage) -> None:
        storage.save(Document())
        assert storage.load() == Document()

    def test_group_duplicates_and_order(self, storage: TomlStorage) -> None:
        doc = Document(links={"a": "u", "b": "v"}, groups={"g": ["b", "a", "b"]})
        storage.save(doc)
        assert storage.load().groups == {"g": ["b", "a", "b"]}

    def test_keys_needing_quotes(self, storage: TomlStorage) -> None:
        doc = Document(links={"my link": "https://x", "a.b": "https://y"})
        storage.save(doc)
        assert storage.load() == doc

    def test_save_replaces_whole_document(self, storage: TomlStorage, document: Document) -> None:
        storage.save(document)
        storage.save(Document(links={"only": "u"}))
        assert storage.load() == Document(links={"only": "u"})

    def test_written_file_is_plain_toml(self, storage: TomlStorage, document: Document) -> None:
        storage.save(document)
        data = tomllib.loads(storage.path.read_text(encoding="utf-8"))
        assert data["links"]["github"] == "https://github.com"
        assert data["groups"]["dev"] == ["gh", "py"]

    def test_no_temp_files_left_behind(self, storage: TomlStorage, document: Document) -> None:
        storage.save(document)
        storage.save(document)
        assert [p.name for p in storage.path.parent.iterdir()] == ["config.toml"]


class TestLoadFailures:
    def test_missing_file_is_io_error(self, storage: TomlStorage) -> None:
        with pytest.raises(StorageIOError, match="Failed to read links file"):
            storage.load()

    def test_malformed_toml_is_parse_error(self, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("[links\nbroken = ", encoding="utf-8")
        with pytest.raises(ParseError, match="Failed to parse links file"):
            storage.load()

    def test_wrong_shape_is_parse_error(self, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text('[groups]\ndev = "gh"\n', encoding="utf-8")
        with pytest.raises(ParseError, match="Invalid links file"):
            storage.load()

    def test_invalid_utf8_is_parse_error(self, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_bytes(b'[links]\nx = "\xff\xfe"\n')
        with pytest.raises(ParseError, match="Failed to parse links file"):
            storage.load()

    def test_missing_sections_load_as_empty(self, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text('[links]\na = "https://a"\n', encoding="utf-8")
        assert storage.load() == Document(links={"a": "https://a"})

    def test_dangling_references_logged_not_raised(
        self, storage: TomlStorage, caplog: pytest.LogCaptureFixture
    ) -> None:
        storage.save(Document(aliases={"x": "gone"}))
        with caplog.at_level(logging.WARNING, logger="linkctl"):
            doc = storage.load()
        assert doc.aliases == {"x": "gone"}
        assert "alias 'x' points to 'gone' which is not in [links]" in caplog.text


class TestSymlinkedFile:
    @pytest.fixture
    def linked(self, tmp_path: Path) -> tuple[Path, Path]:
        real = tmp_path / "dotfiles" / "links.toml"
        real.parent.mkdir()
        real.write_text('[links]\nold = "https://old"\n', encoding="utf-8")
        link = tmp_path / "config" / "config.toml"
        link.parent.mkdir()
        link.symlink_to(real)
        return real, link

    def test_save_keeps_symlink(self, linked: tuple[Path, Path]) -> None:
        real, link = linked
        TomlStorage(link).save(Document(links={"a": "https://a"}))
        assert link.is_symlink()
        assert tomllib.loads(real.read_text(encoding="utf-8"))["links"] == {"a": "https://a"}

    def test_no_temp_files_beside_link(self, linked: tuple[Path, Path]) -> None:
        real, link = linked
        TomlStorage(link).save(Document())
        assert [p.name for p in link.parent.iterdir()] == ["config.toml"]
        assert [p.name for p in real.parent.iterdir()] == ["links.toml"]

    def test_load_through_symlink(self, linked: tuple[Path, Path]) -> None:
        _, link = linked
        assert TomlStorage(link).load().links == {"old": "https://old"}

    def test_initialize_dangling_link_creates_target(self, tmp_path: Path) -> None:
        real = tmp_path / "dotfiles" / "links.toml"
        real.parent.mkdir()
        link = tmp_path / "config.toml"
        link.symlink_to(real)
        assert TomlStorage(link).initialize() is True
        assert link.is_symlink()
        assert real.is_file()


class TestFileMode:
    def test_save_keeps_existing_mode(self, storage: TomlStorage, document: Document) -> None:
        storage.save(document)
        storage.path.chmod(0o644)
        storage.save(Document())
        assert stat.S_IMODE(storage.path.stat().st_mode) == 0o644


class TestSaveFailures:
    def test_unwritable_location_is_io_error(self, tmp_path: Path, document: Document) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = TomlStorage(blocker / "config.toml")
        with pytest.raises(StorageIOError, match="Failed to write links file"):
            storage.save(document)

    def test_failed_write_keeps_previous_content(
        self, storage: TomlStorage, document: Document, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        storage.save(document)

        def broken_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        with monkeypatch.context() as mp:
            mp.setattr("linkctl.infrastructure.toml_storage.os.replace", broken_replace)
            with pytest.raises(StorageIOError, match="disk full"):
                storage.save(Document())

        assert storage.load() == document
        assert [p.name for p in storage.path.parent.iterdir()] == ["config.toml"]


class TestBackend:
    def test_is_storage(self, storage: TomlStorage) -> None:
        assert isinstance(storage, Storage)

    def test_backend_name_and_location(self, storage: TomlStorage) -> None:
        assert storage.backend_name() == "toml"
        assert storage.location() == storage.path

    def test_default_path(self, _isolated_home: Path) -> None:
        storage = TomlStorage.with_default_path()
        assert storage.path == _isolated_home / ".config" / "linkctl" / "links" / "config.toml"

    def test_create_storage_uses_settings_path(self, links_path: Path) -> None:
        settings = LinkSettings(links_path=links_path)
        storage = create_storage(settings)
        assert isinstance(storage, TomlStorage)
        assert storage.path == links_path
