"""
HTTP transport for the plugin catalog: catalog requests and archive downloads.
"""

import logging
from typing import Optional

import aiohttp

from plugin_repo import __version__
from plugin_repo.media.downloader import Downloader, raise_for_status
from plugin_repo.media.integrity import ArchiveIntegrityChecker
from plugin_repo.models.compat import CompatibilityOpts
from plugin_repo.models.config import RepositoryConfig
from plugin_repo.models.download import PluginArchive

log = logging.getLogger(__name__)


class RepositoryClient:
    """
    Async client used by the repository service for all network traffic.

    Exposes two operations: `send_request`, which returns the body of a catalog
    request, and `download`, which fetches an archive and validates it against
    an expected checksum.
    """

    def __init__(
        self,
        config: RepositoryConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the client.

        Args:
            config: Transport settings (TLS verification, timeouts, retries).
            session: An existing session to use instead of creating one. A
                supplied session is left open by `close()`.
        """
        self.config = config
        self._session = session
        self._owns_session = session is None
        self._downloader = Downloader(
            max_attempts=config.max_attempts, base_delay=config.base_delay
        )

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            if self.config.skip_tls_verify:
                log.debug("TLS certificate verification is disabled.")
            connector = aiohttp.TCPConnector(
                ssl=not self.config.skip_tls_verify,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            timeout = self.config.request_timeout
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": f"plugin-repo/{__version__}"},
                timeout=aiohttp.ClientTimeout(
                    total=timeout, sock_connect=min(15.0, timeout)
                ),
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def send_request(self, url: str, compat_opts: CompatibilityOpts) -> bytes:
        """
        Performs a single GET against the catalog and returns the raw body.

        Compatibility headers are attached so the server can filter versions.
        """
        session = await self._initialize_session()
        log.debug(f"Sending request to {url}")
        async with session.get(url, headers=compat_opts.request_headers()) as r:
            await raise_for_status(r)
            return await r.read()

    async def download(
        self, url: str, checksum: str, compat_opts: CompatibilityOpts
    ) -> PluginArchive:
        """
        Downloads an archive and validates it when `checksum` is non-empty.

        Raises:
            ChecksumMismatchError: If the downloaded bytes do not match `checksum`.
        """
        session = await self._initialize_session()
        log.debug(f"Downloading plugin archive from {url}")
        data = await self._downloader.download_bytes(
            session, url, headers=compat_opts.request_headers()
        )
        ArchiveIntegrityChecker.verify_sha256(data, checksum, url)
        return PluginArchive(data=data, checksum=checksum, url=url)
