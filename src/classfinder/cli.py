# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for browsing discovered classes."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich import box
from rich.table import Table

from .catalog import ClassCatalog
from .config import load_config
from .console import ConsoleOutput
from .entries import EntryValue, Unreflected
from .errors import ClassFinderError
from .reflection import ClassReflector, ReflectedClass
from .sources import build_class_source

app = typer.Typer(
    name="classfinder",
    help="Discover classes by name prefix and structural traits.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Discover classes by name prefix and structural traits."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
        force=True,
    )


def _describe(name: str, value: EntryValue) -> dict[str, str | None]:
    """Return a JSON-friendly row describing a catalog entry."""

    if isinstance(value, Unreflected):
        return {"name": name, "kind": None, "source": value.path or None}
    handle = value.handle
    if isinstance(handle, ReflectedClass):
        return {"name": name, "kind": handle.kind, "source": handle.source_file}
    return {"name": name, "kind": None, "source": None}


@app.command("find")
def find_classes(
    prefix: str = typer.Argument("", help="Class name prefix, e.g. 'myapp.handlers'."),
    packages: list[str] | None = typer.Option(
        None,
        "--package",
        "-p",
        help="Package to scan statically; repeatable. Overrides [tool.classfinder] packages.",
    ),
    root: Path | None = typer.Option(None, "--root", "-r", help="Directory holding pyproject.toml."),
    subclass_of: str | None = typer.Option(
        None,
        "--subclass-of",
        "-s",
        help="Keep classes deriving from or implementing this dotted class name.",
    ),
    normal: bool = typer.Option(False, "--normal", help="Keep instantiable classes only."),
    trait: bool = typer.Option(False, "--trait", help="Keep traits and mixins only."),
    interface: bool = typer.Option(False, "--interface", help="Keep interfaces only."),
    no_reflect: bool = typer.Option(False, "--no-reflect", help="List source paths without importing classes."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colour output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """List classes under PREFIX that satisfy the requested structural filters.

    Raises:
        typer.BadParameter: If structural filters are combined with ``--no-reflect``.
        typer.Exit: With status 1 when discovery or reflection fails.
    """

    out = ConsoleOutput(color=not no_color, emoji=not no_emoji)
    if no_reflect and (subclass_of is not None or normal or trait or interface):
        raise typer.BadParameter("Structural filters need reflected classes; drop --no-reflect.")

    try:
        config = load_config((root or Path.cwd()).resolve())
        if packages:
            config = config.model_copy(update={"packages": list(packages)})
        catalog = ClassCatalog(
            source=build_class_source(config),
            reflector=ClassReflector(config.trait_suffixes),
        )
        found = catalog.namespace(prefix, should_reflect=not no_reflect)
        if subclass_of is not None:
            found = found.is_subclass_of(subclass_of)
        if normal:
            found = found.is_normal()
        if trait:
            found = found.is_trait()
        if interface:
            found = found.is_interface()
    except ClassFinderError as exc:
        out.message("fail", str(exc))
        raise typer.Exit(code=1) from exc

    rows = [_describe(name, value) for name, value in found.items()]
    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return
    if not rows:
        out.message("warn", f"No classes found under {prefix!r}")
        return

    out.section(f"Classes under {prefix or '<all>'}")
    origin = ", ".join(config.packages) if config.packages else "loaded modules"
    out.message("info", f"Source: {origin}")
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Class", style="cyan" if out.color else None, no_wrap=True)
    table.add_column("Kind")
    table.add_column("Source", overflow="fold")
    for row in rows:
        table.add_row(row["name"] or "", row["kind"] or "-", row["source"] or "-")
    out.render(table)
    out.message("ok", f"Found {len(rows)} class(es)")


__all__ = ["app", "find_classes"]
