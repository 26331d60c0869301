"""
Resolves plugin versions against the catalog and fetches their archives.
"""

import logging
from dataclasses import replace
from typing import Optional

from pydantic import ValidationError

from plugin_repo.api.client import RepositoryClient
from plugin_repo.exceptions import (
    CatalogResponseError,
    PluginNotFoundError,
    RepositoryResponseError,
)
from plugin_repo.models.catalog import Plugin, Version
from plugin_repo.models.compat import ANY_ARCH, CompatibilityOpts
from plugin_repo.models.config import RepositoryConfig
from plugin_repo.models.download import DownloadOptions, PluginArchive

from .selector import select_version

log = logging.getLogger(__name__)


def build_download_options(
    api_root: str, plugin_id: str, version: Version, compat_opts: CompatibilityOpts
) -> DownloadOptions:
    """
    Composes the download URL and checksum for a selected version.

    The checksum comes from the entry for this system's architecture key, then
    from the "any" entry. Plugins distributed as source-code zipballs carry no
    arch metadata and therefore no checksum; that is not an error.
    """
    checksum = ""
    if version.arch is not None:
        arch_meta = version.arch.get(compat_opts.os_and_arch())
        if arch_meta is None:
            arch_meta = version.arch.get(ANY_ARCH)
        if arch_meta is not None:
            checksum = arch_meta.sha256

    return DownloadOptions(
        version=version.version,
        checksum=checksum,
        plugin_zip_url=(
            f"{api_root.rstrip('/')}/{plugin_id}/versions/{version.version}/download"
        ),
    )


class PluginRepositoryService:
    """Looks up plugins in the remote catalog and retrieves their archives."""

    def __init__(
        self,
        config: RepositoryConfig,
        client: Optional[RepositoryClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.client = client or RepositoryClient(config)
        self.log = logger or log

    async def __aenter__(self) -> "PluginRepositoryService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.close()

    async def get_plugin_archive(
        self, plugin_id: str, version: str, compat_opts: CompatibilityOpts
    ) -> PluginArchive:
        """Fetches the requested plugin archive (latest supported if `version` is empty)."""
        dl_opts = await self.get_plugin_download_options(
            plugin_id, version, compat_opts
        )
        archive = await self.client.download(
            dl_opts.plugin_zip_url, dl_opts.checksum, compat_opts
        )
        return replace(archive, version=dl_opts.version)

    async def get_plugin_archive_by_url(
        self, plugin_zip_url: str, compat_opts: CompatibilityOpts
    ) -> PluginArchive:
        """Fetches an archive from `plugin_zip_url` without consulting the catalog."""
        return await self.client.download(plugin_zip_url, "", compat_opts)

    async def get_plugin_download_options(
        self, plugin_id: str, version: str, compat_opts: CompatibilityOpts
    ) -> DownloadOptions:
        """Returns the options for downloading the requested plugin."""
        plugin = await self.plugin_metadata(plugin_id, compat_opts)
        selected = select_version(plugin, version, compat_opts, logger=self.log)
        return build_download_options(
            self.config.api_root, plugin_id, selected, compat_opts
        )

    async def plugin_metadata(
        self, plugin_id: str, compat_opts: CompatibilityOpts
    ) -> Plugin:
        """Fetches and parses the catalog entry for `plugin_id`."""
        self.log.debug(
            f'Fetching metadata for plugin "{plugin_id}" from repo {self.config.repo_url}'
        )
        url = f"{self.config.repo_url.rstrip('/')}/repo/{plugin_id}"

        try:
            body = await self.client.send_request(url, compat_opts)
        except RepositoryResponseError as e:
            if e.status == 404:
                raise PluginNotFoundError(plugin_id) from e
            raise

        try:
            plugin = Plugin.model_validate_json(body)
        except ValidationError as e:
            self.log.error(f"Failed to unmarshal plugin repo response error: {e}")
            raise CatalogResponseError(
                f"Invalid catalog response for plugin '{plugin_id}'"
            ) from e

        if not plugin.id:
            plugin = plugin.model_copy(update={"id": plugin_id})
        return plugin


def provide_service(
    logger: Optional[logging.Logger] = None,
) -> PluginRepositoryService:
    """Builds a service against the default public catalog."""
    return PluginRepositoryService(
        RepositoryConfig(),
        logger=logger or logging.getLogger("plugin_repo.repository"),
    )
