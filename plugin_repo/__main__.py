"""
Main entry point for the plugin-repo application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from plugin_repo.cli.app import app
from plugin_repo.cli.formatters import format_error_with_suggestions
from plugin_repo.exceptions import ChecksumMismatchError, PluginRepoError

EXIT_ERROR = 1
EXIT_CHECKSUM_MISMATCH = 2
EXIT_CANCELLED = 130


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("plugin_repo")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(EXIT_CANCELLED)
    except ChecksumMismatchError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(EXIT_CHECKSUM_MISMATCH)
    except PluginRepoError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(EXIT_ERROR)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
