"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LINKCTL_*`` prefix (``LINKCTL_SERVER__PORT=8080``)
  3. TOML file    — ``settings.toml`` located by :func:`find_settings`
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from linkctl.config.discovery import default_links_path, find_settings
from linkctl.config.models import EditorConfig, ServerConfig, StorageConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``settings.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LinkSettings(BaseSettings):
    """Unified settings for the linkctl CLI and web app.

    Attributes:
        links_path: Explicit links file (``--config`` or
            ``LINKCTL_LINKS_PATH``); None means the default location.
        settings_path: The ``settings.toml`` that was merged, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LINKCTL_",
        "env_nested_delimiter": "__",
    }

    links_path: Path | None = None
    settings_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        links_path: str | Path | None = None,
        **cli_flags: Any,
    ) -> LinkSettings:
        """Construct settings from a CLI invocation.

        Locates ``settings.toml`` and merges CLI flags as highest-priority
        overrides. *links_path* is only passed through when given, so an
        unset ``--config`` never masks ``LINKCTL_LINKS_PATH``.
        """
        toml_path = find_settings()
        overrides: dict[str, Any] = dict(cli_flags)
        if links_path is not None:
            overrides["links_path"] = Path(links_path)

        _tls.toml_path = toml_path
        try:
            return cls(settings_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def resolved_links_path(self) -> Path:
        """The links file to use: explicit override or the default location."""
        if self.links_path is not None:
            return self.links_path.expanduser()
        return default_links_path()
