"""Catalog rendering – plain structured lines first, styling at the edge.

Every rendered line is a tuple of ``(text, field)`` segments.  The field says
*what* a piece of text is (post number, author, ...); only :func:`to_text`
turns fields into colors, so the same lines can be written to the TUI, a log
file or a test assertion.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from rich.style import Style
from rich.text import Text

from .models import Board, CatalogPage, Thread, iter_threads


class Field(Enum):
    NUMBER = "number"
    FILENAME = "filename"
    AUTHOR = "author"
    POSTED = "posted"
    SUBJECT = "subject"
    COMMENT = "comment"
    LABEL = "label"
    ERROR = "error"


Segment = tuple[str, Optional[Field]]
Line = tuple[Segment, ...]

STYLES: dict[Field, Style] = {
    Field.NUMBER: Style(color="cyan", bold=True),
    Field.FILENAME: Style(color="cyan", underline=True),
    Field.AUTHOR: Style(color="green", bold=True),
    Field.SUBJECT: Style(color="blue", bold=True),
    Field.LABEL: Style(bold=True),
    Field.ERROR: Style(color="red", bold=True),
}


def board_line(board: Board) -> str:
    return board.label


def thread_lines(thread: Thread) -> list[Line]:
    """The four lines of a catalog entry followed by a blank separator."""
    return [
        ((f"No.{thread.id}", Field.NUMBER),),
        (
            (thread.attachment, Field.FILENAME),
            (f" {thread.author}", Field.AUTHOR),
            (f" {thread.posted_at}", Field.POSTED),
        ),
        ((thread.subject, Field.SUBJECT),),
        ((thread.comment, Field.COMMENT),),
        (),
    ]


def catalog_lines(pages: list[CatalogPage]) -> list[Line]:
    lines: list[Line] = []
    for thread in iter_threads(pages):
        lines.extend(thread_lines(thread))
    return lines


def plain_text(lines: Iterable[Line]) -> str:
    return "\n".join("".join(text for text, _ in line) for line in lines)


def to_text(lines: Iterable[Line]) -> Text:
    """Apply :data:`STYLES` to structured lines."""
    out = Text()
    for i, line in enumerate(lines):
        if i:
            out.append("\n")
        for text, field in line:
            out.append(text, style=STYLES.get(field) if field else None)
    return out


def render_thread(thread: Thread) -> Text:
    return to_text(thread_lines(thread))


def render_catalog(pages: list[CatalogPage]) -> Text:
    return to_text(catalog_lines(pages))


def strip_markup(markup: str) -> str:
    """Convert upstream markup (``<br>``, quote links, entities) to plain text."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return soup.get_text()


def detail_lines(board: str, thread: Thread, image_url: str | None) -> list[Line]:
    lines: list[Line] = [
        ((f"/{board}/ ", Field.LABEL), (f"No.{thread.id}", Field.NUMBER)),
        ((thread.author, Field.AUTHOR), (f" {thread.posted_at}", Field.POSTED)),
    ]
    if thread.attachment:
        lines.append(((thread.attachment, Field.FILENAME),))
    if image_url:
        lines.append(((image_url, None),))
    lines.append(())
    if thread.subject:
        lines.append(((thread.subject, Field.SUBJECT),))
    lines.extend(((text, Field.COMMENT),) for text in strip_markup(thread.comment).split("\n"))
    return lines


def render_detail(board: str, thread: Thread, image_url: str | None) -> Text:
    return to_text(detail_lines(board, thread, image_url))


def render_error(message: str) -> Text:
    return to_text([(("Error: ", Field.ERROR), (message, None))])
