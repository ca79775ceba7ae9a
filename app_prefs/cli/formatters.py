"""
Functions for formatting and displaying preferences in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from app_prefs.core.kinds import kind_of_value

KIND_COLORS = {
    "bool": "magenta",
    "int": "cyan",
    "double": "cyan",
    "string": "green",
    "string_list": "yellow",
}


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "TypeMismatchError": [
            "• The key holds a value of a different kind.",
            "• Run `app-prefs show` to see the stored kind.",
            "• Use `app-prefs set --force` to overwrite it with a new kind.",
        ],
        "UnsupportedTypeError": [
            "• Preferences store bool, int, float, str or list[str] values.",
            "• Supply a converter for any other type.",
        ],
        "StorageError": [
            "• The preference file may be corrupt or hand-edited.",
            "• Check that it contains a single JSON object.",
        ],
        "ConfigurationError": [
            "• Check the --file and --prefix options.",
            "• The APP_PREFS_FILE environment variable may point to a directory.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def format_value(value: Any) -> str:
    """Renders a stored value the way it is typed on the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(map(str, value))
    return str(value)


def print_preferences_table(path: Path, items: dict[str, Any], console: Console):
    """Displays every stored preference with its kind."""
    if not items:
        console.print(f"[dim]No preferences stored in '{escape(str(path))}'.[/dim]")
        return

    table = Table(
        title=f"Preferences ([dim]{escape(str(path))}[/dim])",
        title_justify="left",
        header_style="bold cyan",
    )
    table.add_column("Key", style="bold")
    table.add_column("Kind")
    table.add_column("Value", overflow="fold")

    for key, value in items.items():
        kind = kind_of_value(value)
        if kind is None:
            kind_cell = "[red]unsupported[/red]"
        else:
            kind_cell = f"[{KIND_COLORS[kind.label]}]{kind.label}[/]"
        table.add_row(escape(key), kind_cell, escape(format_value(value)))

    console.print(table)
