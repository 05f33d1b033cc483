"""External processes — the OS "open" handler and the user's editor.

Both are best-effort collaborators: failures raise
:class:`~linkctl.domain.errors.ExternalProcessError` for the caller to
report, nothing here retries.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

import click

from linkctl.domain.errors import ExternalProcessError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


def open_uri(uri: str) -> None:
    """Open *uri* with the OS default handler (browser, file viewer, ...)."""
    logger.debug("Launching %s", uri)
    code = click.launch(uri)
    if code != 0:
        msg = f"failed to open {uri} (exit status {code})"
        raise ExternalProcessError(msg, returncode=code)


def resolve_editor(configured: str | None = None) -> str:
    """Pick the editor command: explicit setting, then ``$EDITOR``, then vi."""
    return configured or os.environ.get("EDITOR") or DEFAULT_EDITOR


def run_editor(path: Path, editor: str) -> int:
    """Run *editor* on *path* and wait for it to exit.

    *editor* may carry arguments (``"code --wait"``). Returns the exit
    status, which is always 0 since non-zero raises.
    """
    argv = [*shlex.split(editor), str(path)]
    logger.debug("Running editor: %s", argv)
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        msg = f"Editor {editor} not found in PATH"
        raise ExternalProcessError(msg) from exc

    if completed.returncode != 0:
        msg = f"Editor exited with non-zero status {completed.returncode}"
        raise ExternalProcessError(msg, returncode=completed.returncode)
    return completed.returncode
