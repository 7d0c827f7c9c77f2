"""Tests for payload decoding (no network needed)."""

import pytest

from tools.chanterm.errors import FetchError, PayloadError
from tools.chanterm.models import Board, CatalogPage, Thread, iter_threads, parse_boards, parse_catalog

from conftest import BOARDS_PAYLOAD, CATALOG_PAYLOAD


class TestParseBoards:
    def test_keeps_count_and_order(self) -> None:
        boards = parse_boards(BOARDS_PAYLOAD)
        assert [b.code for b in boards] == ["g", "a", "r9k"]

    def test_fields_copied_verbatim(self) -> None:
        board = parse_boards(BOARDS_PAYLOAD)[0]
        assert board == Board(code="g", title="Technology", description="&quot;/g/&quot; is for technology.")

    def test_empty_list(self) -> None:
        assert parse_boards({"boards": []}) == []

    def test_missing_boards_key(self) -> None:
        with pytest.raises(PayloadError):
            parse_boards({"something": []})

    def test_not_an_object(self) -> None:
        with pytest.raises(PayloadError):
            parse_boards([])

    def test_label(self) -> None:
        assert Board(code="g", title="Technology").label == "g - Technology"


class TestParseCatalog:
    def test_pages_and_threads_in_order(self) -> None:
        pages = parse_catalog(CATALOG_PAYLOAD)
        assert len(pages) == 2
        assert [t.id for t in iter_threads(pages)] == [1, 2, 3]

    def test_full_thread(self) -> None:
        thread = parse_catalog(CATALOG_PAYLOAD)[0].threads[0]
        assert thread == Thread(
            id=1,
            subject="s",
            comment="hi",
            author="n",
            posted_at="now",
            filename="f",
            ext=".png",
            tim=123,
        )
        assert thread.attachment == "f.png"
        assert thread.has_file

    def test_missing_optional_fields_default(self) -> None:
        thread = Thread.from_json({"no": 7})
        assert thread.subject == ""
        assert thread.attachment == ""
        assert thread.tim == 0
        assert not thread.has_file

    def test_page_without_threads(self) -> None:
        assert CatalogPage.from_json({"page": 1}) == CatalogPage()

    def test_thread_without_number(self) -> None:
        with pytest.raises(PayloadError):
            Thread.from_json({"sub": "no number"})

    def test_wrong_types(self) -> None:
        with pytest.raises(PayloadError):
            Thread.from_json({"no": "1"})
        with pytest.raises(PayloadError):
            Thread.from_json({"no": 1, "sub": 5})
        with pytest.raises(PayloadError):
            Thread.from_json({"no": True})

    def test_top_level_must_be_array(self) -> None:
        with pytest.raises(PayloadError):
            parse_catalog({"threads": []})

    def test_payload_error_is_fetch_error(self) -> None:
        assert issubclass(PayloadError, FetchError)
