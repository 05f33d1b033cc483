"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``settings.toml`` only
contains overrides. No settings file is needed at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["toml"] = "toml"


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = Field(default=1414, ge=1, le=65535)
    open_browser: bool = True


class EditorConfig(BaseModel):
    """[editor] section.

    ``command`` unset means: use ``$EDITOR``, falling back to ``vi``.
    """

    model_config = {"frozen": True}

    command: str | None = None
