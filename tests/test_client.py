"""HTTP transport: catalog requests, downloads, retries and checksum validation."""

import asyncio
import hashlib

import aiohttp
import pytest

from plugin_repo.api.client import RepositoryClient
from plugin_repo.exceptions import ChecksumMismatchError, RepositoryResponseError
from plugin_repo.media.downloader import Downloader
from plugin_repo.models import CompatibilityOpts

from .conftest import API_ROOT, FakeResponse, FakeSession

ARCHIVE = b"PK\x03\x04" + b"plugin-bytes" * 50000
ARCHIVE_SHA = hashlib.sha256(ARCHIVE).hexdigest()
ZIP_URL = f"{API_ROOT}/foo/versions/2.0.0/download"


class TestSendRequest:
    @pytest.mark.asyncio
    async def test_returns_body_and_sends_compat_headers(self, config):
        session = FakeSession(FakeResponse(body={"id": "foo", "versions": []}))
        client = RepositoryClient(config, session=session)
        opts = CompatibilityOpts(os="Linux", arch="arm64", host_version="10.1.0")

        body = await client.send_request(f"{API_ROOT}/repo/foo", opts)

        assert b'"id": "foo"' in body
        headers = session.calls[0]["headers"]
        assert headers["X-Plugin-OS"] == "linux"
        assert headers["X-Plugin-Arch"] == "arm64"
        assert headers["X-Plugin-Compat"] == "linux_arm64"
        assert headers["X-Host-Version"] == "10.1.0"

    @pytest.mark.asyncio
    async def test_error_status_uses_json_message(self, config, linux_amd64):
        session = FakeSession(
            FakeResponse(status=404, body={"message": "Plugin not found"}, reason="Not Found")
        )
        client = RepositoryClient(config, session=session)

        with pytest.raises(RepositoryResponseError) as exc_info:
            await client.send_request(f"{API_ROOT}/repo/missing", linux_amd64)

        assert exc_info.value.status == 404
        assert exc_info.value.message == "Plugin not found"

    @pytest.mark.asyncio
    async def test_error_status_without_json_body(self, config, linux_amd64):
        session = FakeSession(
            FakeResponse(status=502, body=b"<html>bad gateway</html>", reason="Bad Gateway")
        )
        client = RepositoryClient(config, session=session)

        with pytest.raises(RepositoryResponseError) as exc_info:
            await client.send_request(f"{API_ROOT}/repo/foo", linux_amd64)
        assert exc_info.value.message == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_catalog_request_not_retried(self, config, linux_amd64):
        session = FakeSession(aiohttp.ClientConnectionError("reset"))
        client = RepositoryClient(config, session=session)

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.send_request(f"{API_ROOT}/repo/foo", linux_amd64)
        assert len(session.calls) == 1


class TestDownload:
    @pytest.mark.asyncio
    async def test_valid_checksum(self, config, linux_amd64):
        session = FakeSession(FakeResponse(body=ARCHIVE))
        client = RepositoryClient(config, session=session)

        archive = await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)

        assert archive.data == ARCHIVE
        assert archive.checksum == ARCHIVE_SHA
        assert archive.url == ZIP_URL
        assert session.calls[0]["allow_redirects"] is True

    @pytest.mark.asyncio
    async def test_checksum_is_case_insensitive(self, config, linux_amd64):
        session = FakeSession(FakeResponse(body=ARCHIVE))
        client = RepositoryClient(config, session=session)
        archive = await client.download(ZIP_URL, ARCHIVE_SHA.upper(), linux_amd64)
        assert archive.size == len(ARCHIVE)

    @pytest.mark.asyncio
    async def test_checksum_mismatch(self, config, linux_amd64):
        session = FakeSession(FakeResponse(body=b"tampered"))
        client = RepositoryClient(config, session=session)

        with pytest.raises(ChecksumMismatchError) as exc_info:
            await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)

        assert exc_info.value.expected == ARCHIVE_SHA
        assert exc_info.value.actual == hashlib.sha256(b"tampered").hexdigest()
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_checksum_skips_validation(self, config, linux_amd64):
        session = FakeSession(FakeResponse(body=b"anything"))
        client = RepositoryClient(config, session=session)
        archive = await client.download("https://example.com/p.zip", "", linux_amd64)
        assert archive.data == b"anything"
        assert archive.checksum == ""

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self, config, linux_amd64):
        session = FakeSession(
            aiohttp.ClientConnectionError("reset"),
            FakeResponse(status=503, body=b"", reason="Service Unavailable"),
            FakeResponse(body=ARCHIVE),
        )
        client = RepositoryClient(config, session=session)

        archive = await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)

        assert archive.data == ARCHIVE
        assert len(session.calls) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, config, linux_amd64):
        session = FakeSession(*[asyncio.TimeoutError() for _ in range(3)])
        client = RepositoryClient(config, session=session)

        with pytest.raises(asyncio.TimeoutError):
            await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)
        assert len(session.calls) == 3

    @pytest.mark.asyncio
    async def test_client_errors_not_retried(self, config, linux_amd64):
        session = FakeSession(FakeResponse(status=403, body=b"", reason="Forbidden"))
        client = RepositoryClient(config, session=session)

        with pytest.raises(RepositoryResponseError) as exc_info:
            await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)
        assert exc_info.value.status == 403
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_cancellation_propagates_without_retry(self, config, linux_amd64):
        session = FakeSession(asyncio.CancelledError())
        client = RepositoryClient(config, session=session)

        with pytest.raises(asyncio.CancelledError):
            await client.download(ZIP_URL, ARCHIVE_SHA, linux_amd64)
        assert len(session.calls) == 1


@pytest.mark.asyncio
async def test_supplied_session_left_open(config):
    session = FakeSession()
    client = RepositoryClient(config, session=session)
    await client.close()
    assert session.closed is False


@pytest.mark.asyncio
async def test_downloader_joins_chunks():
    session = FakeSession(FakeResponse(body=ARCHIVE))
    data = await Downloader(max_attempts=1).download_bytes(session, ZIP_URL)
    assert data == ARCHIVE
