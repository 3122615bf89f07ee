"""HTTP client for the wiki's page source API."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "session_token"


class WikiError(Exception):
    """A request to the wiki failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FetchError(WikiError):
    pass


class SaveError(WikiError):
    pass


def _page_path(doc_path: str) -> str:
    return quote(doc_path.strip("/"), safe="/")


class WikiClient:
    """Reads and writes the raw markdown of wiki pages.

    ``GET /api/source/<doc>`` returns the page markdown and
    ``POST /api/save/<doc>`` replaces it. A session token, when given,
    is sent as a cookie. Requests are not retried and have no timeout.
    """

    def __init__(
        self,
        base_url: str,
        session_token: str | None = None,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        cookies = {cookie_name: session_token} if session_token else None
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            cookies=cookies,
            transport=transport,
            timeout=None,
        )

    async def fetch_source(self, doc_path: str) -> str:
        """Fetch the current markdown of a page."""
        url = f"/api/source/{_page_path(doc_path)}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"fetching {doc_path} failed: {e}") from e
        if not response.is_success:
            raise FetchError(
                f"fetching {doc_path} failed: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("fetched %s (%d bytes)", doc_path, len(response.content))
        return response.text

    async def save_source(self, doc_path: str, markdown: str) -> None:
        """Replace the markdown of a page."""
        url = f"/api/save/{_page_path(doc_path)}"
        try:
            response = await self._client.post(
                url,
                content=markdown.encode("utf-8"),
                headers={"Content-Type": "text/markdown"},
            )
        except httpx.HTTPError as e:
            raise SaveError(f"saving {doc_path} failed: {e}") from e
        if not response.is_success:
            raise SaveError(
                f"saving {doc_path} failed: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("saved %s (%d bytes)", doc_path, len(markdown))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> WikiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
