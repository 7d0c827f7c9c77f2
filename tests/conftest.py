"""Shared fixtures: canned API payloads and an httpx-mocked API client."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from tools.chanterm.api import FourChanAPI
from tools.chanterm.config import FourChanConfig

API_BASE = "https://api.test"
IMAGE_BASE = "https://img.test"

BOARDS_PAYLOAD: dict[str, Any] = {
    "boards": [
        {"board": "g", "title": "Technology", "meta_description": "&quot;/g/&quot; is for technology."},
        {"board": "a", "title": "Anime & Manga", "meta_description": "anime"},
        {"board": "r9k", "title": "ROBOT9001", "meta_description": "robots"},
    ]
}

CATALOG_PAYLOAD: list[dict[str, Any]] = [
    {
        "page": 1,
        "threads": [
            {
                "no": 1,
                "com": "hi",
                "sub": "s",
                "name": "n",
                "now": "now",
                "filename": "f",
                "ext": ".png",
                "tim": 123,
            },
            {"no": 2, "com": "line one<br>&gt;greentext", "name": "Anonymous", "now": "01/02/26(Fri)10:00:00"},
        ],
    },
    {
        "page": 2,
        "threads": [
            {"no": 3, "sub": "third", "name": "Anonymous", "now": "later", "filename": "pic", "ext": ".jpg", "tim": 456},
        ],
    },
]


class Recorder:
    """Records the requests made through a MockTransport."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


def routes(table: dict[str, Any]) -> Callable[[httpx.Request], httpx.Response]:
    """Serve JSON bodies by path; a Response value is returned as-is, unknown paths 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = table.get(request.url.path)
        if body is None:
            return httpx.Response(404, text="not found")
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    return handler


@pytest.fixture
def config() -> FourChanConfig:
    return FourChanConfig(api_base=API_BASE, image_base=IMAGE_BASE, timeout=5.0)


@pytest.fixture
def make_api(config: FourChanConfig) -> Callable[..., tuple[FourChanAPI, Recorder]]:
    def factory(handler: Callable[[httpx.Request], httpx.Response] | None = None) -> tuple[FourChanAPI, Recorder]:
        recorder = Recorder(handler or routes({"/boards.json": BOARDS_PAYLOAD, "/g/catalog.json": CATALOG_PAYLOAD}))
        return FourChanAPI(config, transport=httpx.MockTransport(recorder)), recorder

    return factory
