"""
Result types handed back to callers once a version has been resolved or fetched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadOptions:
    """A resolved (version, checksum, URL) triple ready for retrieval."""

    version: str
    checksum: str
    plugin_zip_url: str


@dataclass(frozen=True)
class PluginArchive:
    """
    Raw archive bytes plus the checksum that validated them ("" if none).

    `version` is the resolved catalog version, or "" when fetched by URL.
    """

    data: bytes = field(repr=False)
    checksum: str = ""
    url: str = ""
    version: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    async def save(self, destination_path: str | Path) -> Path:
        """Writes the archive to disk, creating parent directories as needed."""
        path = Path(destination_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(self.data)
        log.debug(f"Wrote {self.size} bytes to '{path}'")
        return path
