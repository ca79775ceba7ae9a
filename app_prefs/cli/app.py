"""
Defines the command-line interface for inspecting and editing a JSON
preference file using Typer.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from app_prefs import __version__
from app_prefs.core.kinds import resolve_kind
from app_prefs.core.preference import AppPreference
from app_prefs.exceptions import TypeMismatchError
from app_prefs.models.config import default_preferences_path, load_storage_config
from app_prefs.storage.json_file import JsonFileStorage

from .formatters import format_value, print_preferences_table

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=False,
        )
    ],
)
log = logging.getLogger("app_prefs")

app = typer.Typer(
    name="app-prefs",
    help=(
        "Inspect and edit a JSON preference file. Use 'app-prefs <command> --help'"
        " for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


class ValueKind(str, Enum):
    """Value kinds accepted on the command line."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    LIST = "list"


VALUE_TYPES: dict[ValueKind, Any] = {
    ValueKind.BOOL: bool,
    ValueKind.INT: int,
    ValueKind.FLOAT: float,
    ValueKind.STR: str,
    ValueKind.LIST: list[str],
}

TRUE_WORDS = {"true", "yes", "on", "1"}
FALSE_WORDS = {"false", "no", "off", "0"}


def parse_value(text: str, kind: ValueKind) -> Any:
    """
    Parses command-line text as a value of the given kind.

    Lists are comma separated; empty items are dropped.

    Raises:
        typer.BadParameter: If the text is not a valid value of that kind.
    """
    if kind is ValueKind.BOOL:
        word = text.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise typer.BadParameter(f"'{text}' is not a boolean (use true or false).")
    if kind is ValueKind.INT:
        try:
            return int(text)
        except ValueError:
            raise typer.BadParameter(f"'{text}' is not an integer.") from None
    if kind is ValueKind.FLOAT:
        try:
            return float(text)
        except ValueError:
            raise typer.BadParameter(f"'{text}' is not a number.") from None
    if kind is ValueKind.LIST:
        return [item.strip() for item in text.split(",") if item.strip()]
    return text


def _open_storage(file: Path | None, prefix: str) -> JsonFileStorage:
    path = file if file is not None else default_preferences_path("app-prefs")
    config = load_storage_config(path=path, prefix=prefix)
    return asyncio.run(JsonFileStorage.open(config))


FILE_OPTION = typer.Option(
    None,
    "--file",
    "-f",
    help="Preference file (default: $APP_PREFS_FILE or the user config directory).",
)
PREFIX_OPTION = typer.Option(
    "", "--prefix", "-p", help="Only use keys stored under this prefix."
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Preference file tool"""
    if version:
        console.print(f"[bold]app-prefs[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("app_prefs").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def show(
    file: Path | None = FILE_OPTION,  # noqa: B008
    prefix: str = PREFIX_OPTION,
):
    """List every stored preference with its kind."""
    storage = _open_storage(file, prefix)
    print_preferences_table(storage.config.path, storage.items(), console)


@app.command()
def get(
    key: str = typer.Argument(..., help="Preference key."),
    value_kind: ValueKind | None = typer.Option(
        None,
        "--type",
        "-t",
        help="Read the value as this kind and fail if it is stored as another.",
    ),
    file: Path | None = FILE_OPTION,  # noqa: B008
    prefix: str = PREFIX_OPTION,
):
    """Print the value of one preference."""
    storage = _open_storage(file, prefix)
    if not storage.contains_key(key):
        console.print(f"[yellow]⚠️  '{key}' is not set.[/yellow]")
        raise typer.Exit(code=1)

    if value_kind is None:
        value = storage.get(key)
    else:
        preference = AppPreference(
            None, key, save_on_set=False, value_type=VALUE_TYPES[value_kind]
        )
        preference.load_value(storage)
        value = preference.value

    console.print(format_value(value), markup=False, highlight=False)


@app.command(name="set")
def set_command(
    key: str = typer.Argument(..., help="Preference key."),
    value: str = typer.Argument(..., help="New value. Lists are comma separated."),
    value_kind: ValueKind = typer.Option(
        ValueKind.STR, "--type", "-t", help="Kind to store the value as."
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite a value currently stored as another kind."
    ),
    file: Path | None = FILE_OPTION,  # noqa: B008
    prefix: str = PREFIX_OPTION,
):
    """Store a value, creating the file if needed."""
    parsed = parse_value(value, value_kind)
    value_type = VALUE_TYPES[value_kind]

    async def _set_async() -> bool | None:
        path = file if file is not None else default_preferences_path("app-prefs")
        storage = await JsonFileStorage.open(
            load_storage_config(path=path, prefix=prefix)
        )

        stored = storage.get(key)
        target_kind = resolve_kind(value_type)
        if stored is not None and not target_kind.accepts(stored):
            if not force:
                raise TypeMismatchError(
                    f"'{key}' holds a {type(stored).__name__} value, "
                    f"not '{target_kind.label}'."
                )
            log.info(f"Replacing the {type(stored).__name__} value of '{key}'.")
            await storage.remove(key)

        preference = AppPreference(
            parsed, key, save_on_set=False, value_type=value_type
        )
        preference.load_value(storage)
        preference.value = parsed
        return await preference.save_value()

    if asyncio.run(_set_async()):
        console.print(f"[green]✓ Saved '{key}'.[/green]")
    else:
        console.print(f"[red]✗ Failed to save '{key}'.[/red]")
        raise typer.Exit(code=1)


@app.command()
def remove(
    key: str = typer.Argument(..., help="Preference key."),
    file: Path | None = FILE_OPTION,  # noqa: B008
    prefix: str = PREFIX_OPTION,
):
    """Delete one preference."""
    storage = _open_storage(file, prefix)
    if not storage.contains_key(key):
        console.print(f"[yellow]⚠️  '{key}' is not set.[/yellow]")
        raise typer.Exit(code=1)

    if asyncio.run(storage.remove(key)):
        console.print(f"[green]✓ Removed '{key}'.[/green]")
    else:
        console.print(f"[red]✗ Failed to remove '{key}'.[/red]")
        raise typer.Exit(code=1)