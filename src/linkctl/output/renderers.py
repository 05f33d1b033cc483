"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from linkctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from linkctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "resolve":
        return str(result.data.get("uri", ""))
    if result.op == "expand":
        return "\n".join(result.data.get("expanded", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lnk.ok")
    op = Text(f"  {result.op}", style="lnk.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lnk.key")
    if key in ("name", "alias"):
        v = Text(str(value), style="lnk.name")
    elif key == "target":
        v = Text(str(value), style="lnk.target")
    elif key in ("url", "uri"):
        v = Text(str(value), style="lnk.url")
    elif key in ("path", "location"):
        v = Text(str(value), style="lnk.path")
    elif isinstance(value, list):
        v = Text(", ".join(str(item) for item in value))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", soft_wrap=True)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"), soft_wrap=True)


def _section_table(key_header: str, value_header: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column(key_header, style="lnk.name", no_wrap=True)
    table.add_column(value_header)
    for key, value in rows:
        table.add_row(Text(key), Text(value))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lnk.error")
    op = Text(f"  {result.op}", style="lnk.op")
    console.print(label, op, Text(" — "), Text(msg), sep="", soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"), soft_wrap=True)


# ── Catalogue renderers ───────────────────────────────────────────────


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the three sections as tables, skipping empty ones."""
    document = result.data.get("document", {})
    by_url = result.data.get("sort") == "url"

    aliases: dict[str, str] = document.get("aliases", {})
    links: dict[str, str] = document.get("links", {})
    groups: dict[str, list[str]] = document.get("groups", {})

    if not (aliases or links or groups):
        console.print("No links yet.")
        return

    sort_index = 1 if by_url else 0
    sections: list[tuple[str, str, str, list[tuple[str, str]]]] = [
        ("aliases", "alias", "target", sorted(aliases.items(), key=lambda kv: kv[sort_index])),
        ("links", "name", "url", sorted(links.items(), key=lambda kv: kv[sort_index])),
        (
            "groups",
            "group",
            "entries",
            [(name, f"[{', '.join(entries)}]") for name, entries in sorted(groups.items())],
        ),
    ]

    first = True
    for title, key_header, value_header, rows in sections:
        if not rows:
            continue
        if not first:
            console.print()
        first = False
        console.print(Text(f"{title}:", style="lnk.section"))
        console.print(_section_table(key_header, value_header, rows))

    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    issues: list[str] = result.data.get("issues", [])
    _field(console, "count", len(issues))
    _field(console, "healthy", result.data.get("healthy", not issues))
    for issue in issues:
        console.print(
            Text("  warning ", style="lnk.warning"), Text(issue), sep="", soft_wrap=True
        )
    if verbose:
        _render_meta(console, result)


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "created", result.data.get("created", False))
    for key in ("backend", "location"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])


# ── Resolution renderers ──────────────────────────────────────────────


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text(str(result.data.get("uri", "")), style="lnk.url"), soft_wrap=True)


def _render_expand(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for name in result.data.get("expanded", []):
        console.print(Text(name), soft_wrap=True)


def _render_open(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """List what was opened; failures travel as warnings on stderr."""
    for outcome in result.data.get("outcomes", []):
        if outcome.get("ok"):
            console.print(
                Text("opening ", style="lnk.key"),
                Text(str(outcome.get("name")), style="lnk.name"),
                Text(f" {outcome.get('uri')}", style="lnk.url"),
                sep="",
                soft_wrap=True,
            )
    if verbose:
        console.print(
            f"\n{result.data.get('opened', 0)} opened, {result.data.get('failed', 0)} skipped"
        )


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/edit/delete results; the document itself is not repeated."""
    _status_line(console, result)
    mutation_keys = (
        "name",
        "alias",
        "target",
        "url",
        "entries",
        "fields_changed",
        "deleted",
        "path",
        "editor",
    )
    for key in mutation_keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Catalogue
    "show": _render_show,
    "check": _render_check,
    "init": _render_init,
    # Resolution
    "resolve": _render_resolve,
    "expand": _render_expand,
    "open": _render_open,
    # Mutations
    "add_link": _render_mutation,
    "add_alias": _render_mutation,
    "add_group": _render_mutation,
    "edit_link": _render_mutation,
    "edit_alias": _render_mutation,
    "edit_group": _render_mutation,
    "delete_link": _render_mutation,
    "delete_alias": _render_mutation,
    "delete_group": _render_mutation,
    "edit_file": _render_mutation,
}
