"""Shared fixtures: sample pages and an in-process fake wiki."""

import httpx
import pytest

from wikiban.client import WikiClient

BOARD_PAGE = """\
---
layout: kanban
---
# Project

Intro text.

## Todo

- [ ] Buy milk <!-- task-id: task_1 -->
  - [ ] 2% preferred <!-- task-id: task_2 -->
- [ ] Call **Bob** <!-- task-id: task_3 -->

## Done

- [x] Write docs <!-- task-id: task_4 -->

## Notes

Some notes that are not tasks.
- a plain bullet
"""


class FakeWiki:
    """Serves /api/source and /api/save from a dict of pages."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = dict(pages or {})
        self.saved: list[tuple[str, str]] = []
        self.requests: list[httpx.Request] = []
        self.fetch_status: int | None = None
        self.save_status: int | None = None
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path.startswith("/api/source/"):
            if self.fetch_status is not None:
                return httpx.Response(self.fetch_status, text="fetch failed")
            doc = path[len("/api/source/") :]
            if doc not in self.pages:
                return httpx.Response(404, text="page not found")
            return httpx.Response(200, text=self.pages[doc])
        if request.method == "POST" and path.startswith("/api/save/"):
            if self.save_status is not None:
                return httpx.Response(self.save_status, text="save failed")
            doc = path[len("/api/save/") :]
            text = request.content.decode("utf-8")
            self.pages[doc] = text
            self.saved.append((doc, text))
            return httpx.Response(200, json={"success": True})
        return httpx.Response(404)

    def client(self) -> WikiClient:
        return WikiClient("http://wiki.test", session_token="secret", transport=self.transport)


@pytest.fixture
def wiki():
    """A fake wiki holding the sample board at 'projects/board'."""
    return FakeWiki({"projects/board": BOARD_PAGE})
