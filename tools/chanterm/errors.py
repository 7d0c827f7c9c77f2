"""Errors raised while fetching and decoding 4chan data."""

from __future__ import annotations


class FetchError(Exception):
    """Base class for anything that stops a board or catalog from loading."""


class TransportError(FetchError):
    """The request never produced a response (DNS, connect, timeout...)."""


class StatusError(FetchError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.url = url
        self.status_code = status_code


class PayloadError(FetchError):
    """The response body is not JSON, or not the JSON we expect."""


class SelectionError(FetchError):
    """The selected line does not name a board."""
