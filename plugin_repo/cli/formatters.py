"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from plugin_repo.models.compat import CompatibilityOpts
from plugin_repo.models.config import RepositoryConfig
from plugin_repo.models.download import DownloadOptions, PluginArchive
from plugin_repo.utils.formatting import format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "VersionNotFoundError": [
            "• Check the version string; it must match a published version exactly.",
            "• Omit --version to install the latest version for your system.",
        ],
        "VersionUnsupportedError": [
            "• This plugin has no build for your OS/architecture.",
            "• Try --os/--arch if you are resolving for another machine.",
            "• Omit --version to pick the latest supported version.",
        ],
        "PluginNotFoundError": [
            "• Verify the plugin ID is spelled correctly.",
            "• Check that `repo_url` points at the right catalog (--show-config).",
        ],
        "ChecksumMismatchError": [
            "• The archive may have been corrupted in transit. Try again.",
            "• If it keeps failing, the catalog entry may be wrong.",
        ],
        "CatalogResponseError": [
            "• The catalog returned an unexpected response.",
            "• Check that `repo_url` points at a plugin catalog.",
        ],
        "RepositoryResponseError": [
            "• The catalog service rejected the request.",
            "• The service might be temporarily unavailable.",
        ],
        "ConfigurationError": [
            "• Fix the values in the configuration file or run `plugin-repo init --force`.",
        ],
        "ClientConnectorError": [
            "• A network connection issue occurred.",
            "• Use --skip-tls-verify only if your catalog uses a self-signed certificate.",
        ],
        "TimeoutError": [
            "• The request timed out. Check your internet connection.",
            "• Increase `request_timeout` in the configuration file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config: RepositoryConfig):
    """Displays the current configuration."""
    console = Console()
    content = "\n".join(
        f"{key} = {value}" for key, value in config.model_dump().items()
    )
    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_download_options(
    plugin_id: str, options: DownloadOptions, compat_opts: CompatibilityOpts
):
    """Displays the resolved version, checksum and URL for a plugin."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Plugin:", plugin_id)
    table.add_row("System:", str(compat_opts))
    table.add_row("Version:", f"[green]{options.version}[/green]")
    table.add_row("Checksum:", options.checksum or "[dim](none published)[/dim]")
    table.add_row("URL:", f"[dim]{options.plugin_zip_url}[/dim]")

    console.print(
        Panel(
            table,
            title="[bold green]✓ Resolved Plugin[/bold green]",
            border_style="green",
        )
    )


def print_archive_saved(archive: PluginArchive, destination: Path):
    """Prints a one-line summary of a saved archive."""
    console = Console()
    verified = (
        "[green]checksum verified[/green]"
        if archive.checksum
        else "[yellow]no checksum[/yellow]"
    )
    console.print(
        f"[green]✓ Saved[/green] {destination} "
        f"([cyan]{format_size(archive.size)}[/cyan], {verified})"
    )
