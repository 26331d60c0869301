"""
Utilities for deriving archive file names and output paths.
"""

from pathlib import Path
from urllib.parse import unquote, urlparse

from pathvalidate import sanitize_filename


def archive_filename(plugin_id: str, version: str) -> str:
    """Default file name for a catalog archive, e.g. 'my-panel-1.2.0.zip'."""
    return sanitize_filename(f"{plugin_id}-{version}.zip", platform="auto")


def filename_from_url(url: str, fallback: str = "plugin.zip") -> str:
    """Uses the last path segment of `url` as a file name."""
    name = Path(unquote(urlparse(url).path)).name
    return sanitize_filename(name, platform="auto") or fallback


def resolve_output_path(output: Path | None, default_name: str) -> Path:
    """
    Returns where an archive should be written.

    An existing directory (or no output at all) receives `default_name`; any other
    path is used as-is.
    """
    if output is None:
        return Path(default_name)
    if output.is_dir():
        return output / default_name
    return output
