"""
Main entry point for the app-prefs command-line tool.
This module handles top-level exception handling and CLI invocation.
"""

import logging
import sys

import typer
from rich.console import Console

from app_prefs.cli.app import app
from app_prefs.cli.formatters import format_error_with_suggestions
from app_prefs.exceptions import AppPrefsError


def main() -> None:
    """Main entry point function."""
    log = logging.getLogger("app_prefs")
    console = Console(stderr=True)

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(130)
    except AppPrefsError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
