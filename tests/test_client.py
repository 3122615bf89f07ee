"""Tests for the wiki HTTP client."""

import httpx
import pytest

from tests.conftest import BOARD_PAGE, FakeWiki
from wikiban.client import FetchError, SaveError, WikiClient


@pytest.mark.asyncio
async def test_fetch_source(wiki):
    async with wiki.client() as client:
        assert await client.fetch_source("projects/board") == BOARD_PAGE
    (request,) = wiki.requests
    assert request.method == "GET"
    assert request.url.path == "/api/source/projects/board"


@pytest.mark.asyncio
async def test_session_cookie_sent(wiki):
    async with wiki.client() as client:
        await client.fetch_source("projects/board")
    assert "session_token=secret" in wiki.requests[0].headers["cookie"]


@pytest.mark.asyncio
async def test_custom_cookie_name(wiki):
    client = WikiClient("http://wiki.test", session_token="s", cookie_name="sid", transport=wiki.transport)
    async with client:
        await client.fetch_source("projects/board")
    assert wiki.requests[0].headers["cookie"] == "sid=s"


@pytest.mark.asyncio
async def test_no_cookie_without_token(wiki):
    async with WikiClient("http://wiki.test/", transport=wiki.transport) as client:
        await client.fetch_source("/projects/board/")
    assert "cookie" not in wiki.requests[0].headers
    assert wiki.requests[0].url.path == "/api/source/projects/board"


@pytest.mark.asyncio
async def test_path_is_quoted():
    wiki = FakeWiki({"my page": "## Todo\n"})
    async with wiki.client() as client:
        assert await client.fetch_source("my page") == "## Todo\n"
    assert wiki.requests[0].url.raw_path == b"/api/source/my%20page"


@pytest.mark.asyncio
async def test_fetch_not_found(wiki):
    async with wiki.client() as client:
        with pytest.raises(FetchError) as info:
            await client.fetch_source("missing")
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_fetch_transport_error():
    def fail(request):
        raise httpx.ConnectError("refused", request=request)

    async with WikiClient("http://wiki.test", transport=httpx.MockTransport(fail)) as client:
        with pytest.raises(FetchError) as info:
            await client.fetch_source("page")
    assert info.value.status_code is None


@pytest.mark.asyncio
async def test_save_source(wiki):
    async with wiki.client() as client:
        await client.save_source("projects/board", "## Done\n")
    (request,) = wiki.requests
    assert request.method == "POST"
    assert request.headers["content-type"] == "text/markdown"
    assert wiki.pages["projects/board"] == "## Done\n"


@pytest.mark.asyncio
async def test_save_failure(wiki):
    wiki.save_status = 403
    async with wiki.client() as client:
        with pytest.raises(SaveError) as info:
            await client.save_source("projects/board", "x")
    assert info.value.status_code == 403
    assert wiki.pages["projects/board"] == BOARD_PAGE
