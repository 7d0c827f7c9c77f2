"""Textual front-end: boards, threads and thread-detail panels."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option
from textual.worker import get_current_worker

from .api import FourChanAPI, board_code
from .config import BrowserConfig
from .errors import FetchError, SelectionError
from .models import Board, CatalogPage, Thread, iter_threads
from .render import (
    board_line,
    render_detail,
    render_error,
    render_thread,
    strip_markup,
)

logger = logging.getLogger("chanterm.app")


class Phase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class PanelState:
    phase: Phase = Phase.IDLE
    error: str | None = None

    def set(self, phase: Phase, error: str | None = None) -> None:
        self.phase = phase
        self.error = error


@dataclass
class BrowserState:
    """Everything the panels show, owned by the app and mutated on its event loop only."""
    boards: list[Board] = field(default_factory=list)
    board: str | None = None
    catalog: list[CatalogPage] = field(default_factory=list)
    threads: list[Thread] = field(default_factory=list)
    detail: Thread | None = None
    boards_panel: PanelState = field(default_factory=PanelState)
    threads_panel: PanelState = field(default_factory=PanelState)


class PanelList(OptionList):
    """An OptionList whose cursor stops at the first and last line instead of wrapping."""

    def action_cursor_up(self) -> None:
        if self.option_count == 0:
            return
        if self.highlighted is None:
            self.highlighted = 0
        elif self.highlighted > 0:
            self.highlighted -= 1

    def action_cursor_down(self) -> None:
        if self.option_count == 0:
            return
        if self.highlighted is None:
            self.highlighted = 0
        elif self.highlighted < self.option_count - 1:
            self.highlighted += 1

    def show_message(self, message: Text | str) -> None:
        self.clear_options()
        self.add_option(Option(Text(message) if isinstance(message, str) else message))
        self.highlighted = None


class ChanBrowser(App):
    """Browse 4chan boards and catalogs."""

    TITLE = "chanterm"

    CSS = """
    #panels {
        height: 1fr;
    }
    #boards {
        width: 1fr;
        height: 1fr;
        margin: 1 0 1 1;
        text-wrap: nowrap;
        text-overflow: ellipsis;
    }
    #boards > .option-list--option {
        text-wrap: nowrap;
        text-overflow: ellipsis;
    }
    #boards > .option-list--option-highlighted {
        background: green;
        color: black;
    }
    #threads {
        width: 2fr;
        height: 1fr;
        margin: 1 0 1 1;
    }
    #thread {
        width: 3fr;
        height: 1fr;
        margin: 1;
        border: round $secondary;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("q", "quit", "Quit"),
        Binding("r", "retry", "Retry"),
    ]

    def __init__(self, cfg: BrowserConfig | None = None, api: FourChanAPI | None = None) -> None:
        super().__init__()
        self.cfg = cfg or BrowserConfig()
        self.api = api or FourChanAPI(self.cfg.fourchan)
        self.state = BrowserState()

    def compose(self) -> ComposeResult:
        with Horizontal(id="panels"):
            boards = PanelList(id="boards")
            boards.border_title = "Boards"
            yield boards
            threads = PanelList(id="threads")
            threads.border_title = "Threads"
            yield threads
            with VerticalScroll(id="thread") as detail:
                detail.border_title = "Thread"
                yield Static(id="thread-body")

    def on_mount(self) -> None:
        self.reload_boards()

    def on_unmount(self) -> None:
        self.api.close()

    # ── panel accessors ──────────────────────────────────────────

    @property
    def boards_panel(self) -> PanelList:
        return self.query_one("#boards", PanelList)

    @property
    def threads_panel(self) -> PanelList:
        return self.query_one("#threads", PanelList)

    @property
    def detail_body(self) -> Static:
        return self.query_one("#thread-body", Static)

    # ── boards ───────────────────────────────────────────────────

    def reload_boards(self) -> None:
        self.state.boards_panel.set(Phase.LOADING)
        self.boards_panel.show_message("Loading boards...")
        self.fetch_boards()

    @work(thread=True, exclusive=True, group="boards")
    def fetch_boards(self) -> None:
        worker = get_current_worker()
        try:
            boards = self.api.get_boards()
        except FetchError as exc:
            logger.error("Could not load boards: %s", exc)
            if not worker.is_cancelled:
                self.call_from_thread(self._boards_failed, str(exc))
            return
        if not worker.is_cancelled:
            self.call_from_thread(self._show_boards, boards)

    def _show_boards(self, boards: list[Board]) -> None:
        self.state.boards = boards
        self.state.boards_panel.set(Phase.READY)
        panel = self.boards_panel
        panel.clear_options()
        panel.add_options([Option(Text(board_line(b))) for b in boards])
        if boards:
            panel.highlighted = 0
        panel.focus()

    def _boards_failed(self, message: str) -> None:
        self.state.boards_panel.set(Phase.ERROR, message)
        self.boards_panel.show_message(render_error(message))

    def selected_line(self) -> str:
        """Read back the text of the highlighted boards line."""
        panel = self.boards_panel
        index = panel.highlighted
        if self.state.boards_panel.phase is not Phase.READY or index is None:
            raise SelectionError("no board is highlighted")
        return str(panel.get_option_at_index(index).prompt)

    @on(OptionList.OptionHighlighted, "#boards")
    def _board_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        index = event.option_index
        if self.state.boards_panel.phase is not Phase.READY or not 0 <= index < len(self.state.boards):
            return
        board = self.state.boards[index]
        self.detail_body.update(Text.assemble((f"/{board.code}/ ", "bold"), board.title, "\n\n", strip_markup(board.description)))

    @on(OptionList.OptionSelected, "#boards")
    def _board_selected(self, event: OptionList.OptionSelected) -> None:
        self.select_board()

    def select_board(self) -> None:
        try:
            selection = self.selected_line()
        except SelectionError as exc:
            self._catalog_failed(str(exc))
            return
        self.open_catalog(selection)

    # ── catalog ──────────────────────────────────────────────────

    def open_catalog(self, selection: str) -> None:
        code = board_code(selection)
        if not code:
            self._catalog_failed(f"no board code in selection {selection!r}")
            return
        self.state.board = code
        self.state.threads_panel.set(Phase.LOADING)
        self.threads_panel.border_title = f"Threads /{code}/"
        self.threads_panel.show_message(f"Loading /{code}/...")
        self.fetch_catalog(code)

    @work(thread=True, exclusive=True, group="catalog")
    def fetch_catalog(self, code: str) -> None:
        worker = get_current_worker()
        try:
            pages = self.api.get_catalog(code)
        except FetchError as exc:
            logger.error("Could not load /%s/ catalog: %s", code, exc)
            if not worker.is_cancelled:
                self.call_from_thread(self._catalog_failed, str(exc), code)
            return
        if not worker.is_cancelled:
            self.call_from_thread(self._show_catalog, code, pages)

    def _show_catalog(self, code: str, pages: list[CatalogPage]) -> None:
        if code != self.state.board:
            logger.debug("Dropping stale /%s/ catalog", code)
            return
        self.state.catalog = pages
        self.state.threads = list(iter_threads(pages))
        self.state.detail = None
        self.state.threads_panel.set(Phase.READY)
        panel = self.threads_panel
        panel.clear_options()
        panel.add_options([Option(render_thread(t)) for t in self.state.threads])
        panel.highlighted = None
        panel.scroll_home(animate=False)
        logger.debug("Rendered %d threads for /%s/", len(self.state.threads), code)

    def _catalog_failed(self, message: str, code: str | None = None) -> None:
        if code is not None and code != self.state.board:
            logger.debug("Dropping stale /%s/ failure", code)
            return
        self.state.catalog = []
        self.state.threads = []
        self.state.detail = None
        self.state.threads_panel.set(Phase.ERROR, message)
        self.threads_panel.show_message(render_error(message))

    def rendered_catalog(self) -> str:
        """Plain text currently shown in the threads panel."""
        panel = self.threads_panel
        return "\n".join(str(panel.get_option_at_index(i).prompt) for i in range(panel.option_count))

    @on(OptionList.OptionHighlighted, "#threads")
    def _thread_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        index = event.option_index
        if self.state.threads_panel.phase is not Phase.READY or not 0 <= index < len(self.state.threads):
            return
        if self.state.board is None:
            return
        thread = self.state.threads[index]
        self.state.detail = thread
        image_url = self.api.image_url(self.state.board, thread)
        self.detail_body.update(render_detail(self.state.board, thread, image_url))
        self.query_one("#thread", VerticalScroll).scroll_home(animate=False)

    # ── actions ──────────────────────────────────────────────────

    def action_retry(self) -> None:
        if self.state.boards_panel.phase is Phase.ERROR:
            self.reload_boards()
        elif self.state.board is not None:
            self.open_catalog(self.state.board)
