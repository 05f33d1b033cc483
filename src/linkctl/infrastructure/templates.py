"""Shared Jinja2 template loading with per-user override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, override_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``<override_root>/templates/``. Both a
    namespaced directory (``templates/web/``) and the shared root are
    searched, so a single override file can be dropped in either place.
    HTML autoescaping is always on.
    """

    loaders: list[BaseLoader] = []
    if override_root is not None:
        template_root = override_root / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("linkctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        keep_trailing_newline=True,
    )
