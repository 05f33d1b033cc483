"""Well-known file locations.

Everything lives under ``~/.config/linkctl/`` on every platform. The
per-OS "app config directory" conventions are deliberately not used so
the path stays predictable for dotfile managers.

- links file:    ``~/.config/linkctl/links/config.toml``
- settings file: ``~/.config/linkctl/settings.toml`` (optional)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = ".config"
APP_NAME = "linkctl"
APP_SUBDIR = "links"
LINKS_FILENAME = "config.toml"
SETTINGS_FILENAME = "settings.toml"
SETTINGS_ENV_VAR = "LINKCTL_SETTINGS"


def app_dir() -> Path:
    """``~/.config/linkctl``."""
    return Path.home() / CONFIG_DIR / APP_NAME


def default_links_path() -> Path:
    """``~/.config/linkctl/links/config.toml``."""
    return app_dir() / APP_SUBDIR / LINKS_FILENAME


def find_settings() -> Path | None:
    """Locate the optional settings file.

    ``LINKCTL_SETTINGS`` wins when set (and is returned only if it points
    at a file). Otherwise the default location is used if it exists.
    """
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    candidate = app_dir() / SETTINGS_FILENAME
    if candidate.is_file():
        return candidate
    return None
