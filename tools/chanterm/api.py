"""4chan API client – boards and catalog fetchers."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from .config import FourChanConfig
from .errors import PayloadError, SelectionError, StatusError, TransportError
from .models import Board, CatalogPage, Thread, parse_boards, parse_catalog

logger = logging.getLogger("chanterm.api")

# Board codes are ASCII ("g", "3", "r9k"); \w alone would also match other scripts.
_BOARD_CODE = re.compile(r"^\w+", re.ASCII)


def board_code(selection: str) -> str:
    """Return the leading board code of a rendered line such as ``"g - Technology"``.

    The empty string is returned when the line is empty or starts with a
    non-word character.
    """
    match = _BOARD_CODE.match(selection)
    return match.group(0) if match else ""


class FourChanAPI:
    """Thin wrapper around the read-only 4chan JSON API."""

    def __init__(self, cfg: FourChanConfig | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
        self.cfg = cfg or FourChanConfig()
        self._client = httpx.Client(
            timeout=self.cfg.timeout,
            headers={"User-Agent": self.cfg.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def _get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            resp = self._client.get(url)
        except httpx.TransportError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(f"{url}: {exc}") from exc
        if resp.is_error:
            logger.warning("%d: %s", resp.status_code, url)
            raise StatusError(url, resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise PayloadError(f"{url}: invalid JSON ({exc})") from exc

    # ── public API ───────────────────────────────────────────────

    def get_boards(self) -> list[Board]:
        """Fetch all boards from boards.json."""
        boards = parse_boards(self._get_json(f"{self.cfg.api_base}/boards.json"))
        logger.info("Fetched %d boards", len(boards))
        return boards

    def get_catalog(self, selection: str) -> list[CatalogPage]:
        """Fetch the catalog (pages with threads) for the board named by ``selection``.

        ``selection`` may be a bare code or a boards-panel line; only its
        leading code is used.
        """
        code = board_code(selection)
        if not code:
            raise SelectionError(f"no board code in selection {selection!r}")
        pages = parse_catalog(self._get_json(f"{self.cfg.api_base}/{code}/catalog.json"))
        logger.info("Fetched /%s/ catalog: %d pages", code, len(pages))
        return pages

    def image_url(self, board: str, thread: Thread) -> str | None:
        """Full-size attachment URL on i.4cdn.org, if the thread has a file."""
        if not thread.has_file:
            return None
        return f"{self.cfg.image_base}/{board}/{thread.tim}{thread.ext}"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> FourChanAPI:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
