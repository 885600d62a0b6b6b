"""Typer CLI entrypoint for versus-vault."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer

from apps.cli.io import read_portrait_data_url, write_json_atomic, write_text_atomic
from core.config.loader import resolve_settings
from core.config.models import EngineSettings
from core.orchestrator.pipeline import (
    build_active_fight,
    build_import_preview,
    fight_view_payload,
    require_import,
)
from core.storage.library import FightLibrary
from core.storage.store import JsonFileFightStore, JsonFileLegacySource
from core.templates.blueprint import build_import_blueprint
from core.templates.catalog import DEFAULT_TEMPLATE_ORDER, get_preset
from core.utils.errors import (
    FightNotFoundError,
    ImportFailedError,
    SettingsError,
    StoreError,
)

app = typer.Typer(help="Versus matchup import CLI", rich_markup_mode=None)

EXIT_OK = 0
EXIT_INTERNAL = 1
EXIT_IMPORT_FAILED = 2
EXIT_NOT_FOUND = 3

StoreOption = Annotated[
    Path | None,
    typer.Option("--store", help="Fight store JSON file (defaults to settings store_path)."),
]


@app.callback()
def cli_callback() -> None:
    """Import versus documents and manage the local fight library."""


@app.command("parse")
def parse_command(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, file_okay=True)],
    out: Annotated[Path | None, typer.Option("--out", help="Write JSON here instead of stdout.")] = None,
) -> None:
    """Parse one document and print the import with its category schema."""

    settings = _load_settings_or_exit()
    try:
        parsed = require_import(_read_document(file), file.name)
    except ImportFailedError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_IMPORT_FAILED) from exc
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc

    _emit_json(build_import_preview(parsed, settings).to_json(), out)


@app.command("blueprint")
def blueprint_command(
    out: Annotated[Path | None, typer.Option("--out", help="Write the blueprint to a file.")] = None,
) -> None:
    """Print an example import document covering every template block."""

    text = build_import_blueprint()
    if out is None:
        typer.echo(text)
        return
    try:
        write_text_atomic(out, text)
    except OSError as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc
    typer.echo(f"INFO: wrote blueprint to {out}")


@app.command("templates")
def templates_command() -> None:
    """List template ids in default order."""

    for template_id in DEFAULT_TEMPLATE_ORDER:
        preset = get_preset(template_id)
        typer.echo(f"{preset.id}\t{preset.name}")


@app.command("add")
def add_command(
    document: Annotated[Path, typer.Argument(exists=True, dir_okay=False, file_okay=True)],
    portrait_a: Annotated[
        Path, typer.Option("--portrait-a", exists=True, dir_okay=False, file_okay=True)
    ],
    portrait_b: Annotated[
        Path, typer.Option("--portrait-b", exists=True, dir_okay=False, file_okay=True)
    ],
    store: StoreOption = None,
) -> None:
    """Import a document with two portraits into the fight library."""

    settings = _load_settings_or_exit()
    try:
        parsed = require_import(_read_document(document), document.name)
        portrait_a_url = read_portrait_data_url(portrait_a)
        portrait_b_url = read_portrait_data_url(portrait_b)
    except ImportFailedError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_IMPORT_FAILED) from exc
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc

    async def _add() -> Any:
        library = await _open_library(settings, store)
        fight = await library.create_from_draft(
            parsed,
            file_name=document.name,
            portrait_a=portrait_a_url,
            portrait_b=portrait_b_url,
        )
        await library.set_active(fight.id)
        return fight

    fight = _run_library(_add())
    typer.echo(f"INFO: added {fight.id} ({fight.name})")


@app.command("list")
def list_command(store: StoreOption = None) -> None:
    """List stored fights, newest first."""

    settings = _load_settings_or_exit()

    async def _list() -> FightLibrary:
        return await _open_library(settings, store)

    library = _run_library(_list())
    if not library.fights:
        typer.echo("INFO: no fights stored")
        return
    for fight in library.fights:
        marker = "*" if fight.id == library.active_fight_id else " "
        typer.echo(f"{marker} {fight.id}\t{fight.name}\t{fight.file_name}")


@app.command("show")
def show_command(
    query: Annotated[str, typer.Argument(help="Fight id, name or file name.")],
    store: StoreOption = None,
    out: Annotated[Path | None, typer.Option("--out")] = None,
) -> None:
    """Print the render-ready view of one stored fight."""

    settings = _load_settings_or_exit()

    async def _show() -> FightLibrary:
        return await _open_library(settings, store)

    library = _run_library(_show())
    try:
        record = library.resolve(query)
    except FightNotFoundError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_NOT_FOUND) from exc

    payload = fight_view_payload(build_active_fight(record, settings))
    _emit_json(payload, out)


@app.command("delete")
def delete_command(
    fight_id: Annotated[str, typer.Argument()],
    store: StoreOption = None,
) -> None:
    """Delete a stored fight by id."""

    settings = _load_settings_or_exit()

    async def _delete() -> bool:
        library = await _open_library(settings, store)
        return await library.delete(fight_id)

    if not _run_library(_delete()):
        typer.echo(f"ERROR: no fight with id {fight_id}")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    typer.echo(f"INFO: deleted {fight_id}")


def _load_settings_or_exit() -> EngineSettings:
    try:
        return resolve_settings()
    except SettingsError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc


async def _open_library(settings: EngineSettings, store: Path | None) -> FightLibrary:
    legacy = (
        JsonFileLegacySource(settings.legacy_store_path)
        if settings.legacy_store_path is not None
        else None
    )
    library = FightLibrary(JsonFileFightStore(store or settings.store_path), legacy)
    await library.restore()
    return library


def _run_library(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except (StoreError, OSError) as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc


def _read_document(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _emit_json(payload: dict[str, Any], out: Path | None) -> None:
    if out is None:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    try:
        write_json_atomic(out, payload)
    except OSError as exc:
        typer.echo(f"ERROR: {type(exc).__name__}: {exc}")
        raise typer.Exit(code=EXIT_INTERNAL) from exc
    typer.echo(f"INFO: wrote {out}")


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
