"""
Handles the low-level downloading of archives over HTTP with retry logic.
"""

import asyncio
import logging

import aiohttp

from plugin_repo.exceptions import RepositoryResponseError

log = logging.getLogger(__name__)


async def raise_for_status(response: aiohttp.ClientResponse) -> None:
    """
    Raises RepositoryResponseError for non-2xx responses, preferring the
    `message` field of a JSON error body over the reason phrase.
    """
    if response.status < 400:
        return

    message = response.reason or ""
    try:
        body = await response.json(content_type=None)
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
    except (aiohttp.ContentTypeError, ValueError):
        pass
    raise RepositoryResponseError(response.status, message, str(response.url))


class Downloader:
    """A low-level archive downloader with retry logic."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, max_attempts: int = 3, base_delay: float = 1.5):
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    @staticmethod
    def _is_retryable(error: Exception) -> bool:
        if isinstance(error, RepositoryResponseError):
            return error.status >= 500
        return isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError))

    async def download_bytes(
        self,
        session: aiohttp.ClientSession,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        """
        Downloads the body at `url` into memory.

        Transient network errors and 5xx responses are retried with exponential
        backoff. Client errors (4xx) and cancellation propagate immediately.
        """
        last_exception: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                async with session.get(
                    url, headers=headers, allow_redirects=True
                ) as response:
                    await raise_for_status(response)

                    chunks = []
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        chunks.append(chunk)
                    data = b"".join(chunks)
                    log.debug(f"Downloaded {len(data)} bytes from '{url}'")
                    return data
            except (
                aiohttp.ClientError,
                asyncio.TimeoutError,
                RepositoryResponseError,
            ) as e:
                if not self._is_retryable(e):
                    raise
                last_exception = e
                log.debug(
                    f"Download attempt {attempt}/{self.max_attempts} for "
                    f"'{url}' failed: {e}. Retrying..."
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        raise last_exception
