"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from plugin_repo import __version__
from plugin_repo.core.service import PluginRepositoryService
from plugin_repo.models.compat import CompatibilityOpts
from plugin_repo.storage.config_manager import ConfigManager
from plugin_repo.utils.path import (
    archive_filename,
    filename_from_url,
    resolve_output_path,
)

from .formatters import print_archive_saved, print_config, print_download_options

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("plugin_repo")

app = typer.Typer(
    name="plugin-repo",
    help="Resolve and download plugin archives from a plugin catalog.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "plugin-repo"


CONFIG_FILE = get_config_dir() / "config.ini"


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
    config_file: Path = typer.Option(
        CONFIG_FILE, "--config", help="Path to the configuration file."
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Plugin catalog CLI"""
    if version:
        console.print(f"[bold]plugin-repo[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("plugin_repo").setLevel(log_level)

    ctx.obj = {"config_file": config_file}

    if show_config:
        config = ConfigManager(config_file).load_config()
        print_config(config_file, config)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _compat_opts(
    os_name: str | None, arch: str | None, host_version: str
) -> CompatibilityOpts:
    system = CompatibilityOpts.from_system(host_version=host_version)
    return CompatibilityOpts(
        os=os_name or system.os,
        arch=arch or system.arch,
        host_version=host_version,
    )


def _service(ctx: typer.Context) -> PluginRepositoryService:
    config = ConfigManager(ctx.obj["config_file"]).load_config()
    return PluginRepositoryService(
        config, logger=logging.getLogger("plugin_repo.repository")
    )


@app.command()
def init(
    ctx: typer.Context,
    repo_url: str | None = typer.Option(
        None, "--repo-url", help="Catalog endpoint used for plugin metadata."
    ),
    api_root: str | None = typer.Option(
        None, "--api-root", help="Endpoint archives are downloaded from."
    ),
    skip_tls_verify: bool = typer.Option(
        False, "--skip-tls-verify", help="Disable TLS certificate verification."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration without asking."
    ),
):
    """Write a configuration file."""
    config_file: Path = ctx.obj["config_file"]
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {"skip_tls_verify": skip_tls_verify}
    if repo_url:
        settings["repo_url"] = repo_url
    if api_root:
        settings["api_root"] = api_root

    ConfigManager(config_file).save_new_config(settings)
    console.print(f"[bold green]✓ Configuration saved to '{config_file}'[/bold green]")


@app.command()
def resolve(
    ctx: typer.Context,
    plugin_id: str = typer.Argument(..., help="Catalog ID of the plugin."),
    version: str = typer.Option(
        "", "--version", "-V", help="Exact version to resolve (default: latest)."
    ),
    os_name: str | None = typer.Option(None, "--os", help="Target operating system."),
    arch: str | None = typer.Option(None, "--arch", help="Target architecture."),
    host_version: str = typer.Option(
        "", "--host-version", help="Version of the host application."
    ),
):
    """Show which version, checksum and URL would be downloaded."""
    compat_opts = _compat_opts(os_name, arch, host_version)

    async def _resolve_async():
        async with _service(ctx) as service:
            return await service.get_plugin_download_options(
                plugin_id, version, compat_opts
            )

    options = asyncio.run(_resolve_async())
    print_download_options(plugin_id, options, compat_opts)


@app.command()
def download(
    ctx: typer.Context,
    plugin_id: str = typer.Argument(..., help="Catalog ID of the plugin."),
    version: str = typer.Option(
        "", "--version", "-V", help="Exact version to download (default: latest)."
    ),
    os_name: str | None = typer.Option(None, "--os", help="Target operating system."),
    arch: str | None = typer.Option(None, "--arch", help="Target architecture."),
    host_version: str = typer.Option(
        "", "--host-version", help="Version of the host application."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="File or directory to write the archive to."
    ),
):
    """Download a plugin archive from the catalog."""
    compat_opts = _compat_opts(os_name, arch, host_version)

    async def _download_async():
        async with _service(ctx) as service:
            log.info(f"Downloading [cyan]{plugin_id}[/cyan]")
            archive = await service.get_plugin_archive(plugin_id, version, compat_opts)
            destination = resolve_output_path(
                output, archive_filename(plugin_id, archive.version)
            )
            return archive, await archive.save(destination)

    archive, destination = asyncio.run(_download_async())
    print_archive_saved(archive, destination)


@app.command(name="download-url")
def download_url(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Direct URL of a plugin archive."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="File or directory to write the archive to."
    ),
):
    """Download an archive from an explicit URL, bypassing the catalog."""
    compat_opts = CompatibilityOpts.from_system()

    async def _download_async():
        async with _service(ctx) as service:
            archive = await service.get_plugin_archive_by_url(url, compat_opts)
            destination = resolve_output_path(output, filename_from_url(url))
            return archive, await archive.save(destination)

    archive, destination = asyncio.run(_download_async())
    print_archive_saved(archive, destination)
