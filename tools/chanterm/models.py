"""Typed views of the 4chan JSON payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .errors import PayloadError


def _str(obj: dict, key: str) -> str:
    val = obj.get(key, "")
    if val is None:
        return ""
    if not isinstance(val, str):
        raise PayloadError(f"field {key!r} should be a string, got {type(val).__name__}")
    return val


def _int(obj: dict, key: str, *, required: bool = False) -> int:
    if key not in obj:
        if required:
            raise PayloadError(f"missing required field {key!r}")
        return 0
    val = obj[key]
    # bool is an int subclass, but never a valid post number or timestamp
    if not isinstance(val, int) or isinstance(val, bool):
        raise PayloadError(f"field {key!r} should be an integer, got {type(val).__name__}")
    return val


def _obj(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise PayloadError(f"{what} should be an object, got {type(data).__name__}")
    return data


def _list(data: Any, what: str) -> list:
    if not isinstance(data, list):
        raise PayloadError(f"{what} should be an array, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Board:
    code: str
    title: str
    description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> Board:
        obj = _obj(data, "board")
        return cls(
            code=_str(obj, "board"),
            title=_str(obj, "title"),
            description=_str(obj, "meta_description"),
        )

    @property
    def label(self) -> str:
        """The line shown for this board in the boards panel."""
        return f"{self.code} - {self.title}"


@dataclass(frozen=True)
class Thread:
    """An OP as it appears in a board catalog."""
    id: int
    subject: str = ""
    comment: str = ""
    author: str = ""
    posted_at: str = ""
    filename: str = ""
    ext: str = ""
    tim: int = 0

    @classmethod
    def from_json(cls, data: Any) -> Thread:
        obj = _obj(data, "thread")
        return cls(
            id=_int(obj, "no", required=True),
            subject=_str(obj, "sub"),
            comment=_str(obj, "com"),
            author=_str(obj, "name"),
            posted_at=_str(obj, "now"),
            filename=_str(obj, "filename"),
            ext=_str(obj, "ext"),
            tim=_int(obj, "tim"),
        )

    @property
    def attachment(self) -> str:
        return f"{self.filename}{self.ext}"

    @property
    def has_file(self) -> bool:
        return bool(self.tim and self.ext)


@dataclass(frozen=True)
class CatalogPage:
    threads: tuple[Thread, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> CatalogPage:
        obj = _obj(data, "catalog page")
        threads = _list(obj.get("threads", []), "page threads")
        return cls(threads=tuple(Thread.from_json(t) for t in threads))


def parse_boards(data: Any) -> list[Board]:
    """Decode a boards.json document into Boards, keeping upstream order."""
    obj = _obj(data, "boards document")
    return [Board.from_json(b) for b in _list(obj.get("boards"), "boards")]


def parse_catalog(data: Any) -> list[CatalogPage]:
    """Decode a catalog.json document (a top-level array of pages)."""
    return [CatalogPage.from_json(p) for p in _list(data, "catalog")]


def iter_threads(pages: list[CatalogPage]) -> Iterator[Thread]:
    for page in pages:
        yield from page.threads
