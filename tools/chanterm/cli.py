"""CLI entry-point for chanterm."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .api import FourChanAPI, board_code
from .config import BrowserConfig, FourChanConfig
from .errors import FetchError
from .models import iter_threads
from .render import strip_markup

console = Console()
err_console = Console(stderr=True)


def _file_handler(log_file: str) -> logging.Handler:
    """RichHandler writing to *log_file*; detached and closed when the click context ends."""
    stream = open(log_file, "a", encoding="utf-8")
    handler = RichHandler(rich_tracebacks=True, console=Console(file=stream, width=120))

    def close() -> None:
        logging.getLogger().removeHandler(handler)
        stream.close()

    ctx = click.get_current_context(silent=True)
    if ctx is not None:
        ctx.call_on_close(close)
    return handler


def _setup_logging(verbose: bool, log_file: str | None, *, tui: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if log_file:
        handler: logging.Handler = _file_handler(log_file)
    elif tui:
        # The terminal belongs to the TUI; records go to the textual devtools console.
        from textual.logging import TextualHandler

        handler = TextualHandler()
    else:
        handler = RichHandler(rich_tracebacks=True, console=err_console)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.group(invoke_without_command=True)
@click.option("--api-base", envvar="CHANTERM_API_BASE", default=FourChanConfig.api_base, show_default=True, help="4chan JSON API base URL")
@click.option("--image-base", envvar="CHANTERM_IMAGE_BASE", default=FourChanConfig.image_base, show_default=True, help="4chan image host base URL")
@click.option("--timeout", envvar="CHANTERM_TIMEOUT", default=FourChanConfig.timeout, type=float, show_default=True, help="HTTP timeout in seconds")
@click.option("--log-file", envvar="CHANTERM_LOG_FILE", default=None, type=click.Path(dir_okay=False), help="Write logs to this file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, api_base: str, image_base: str, timeout: float, log_file: str | None, verbose: bool) -> None:
    """chanterm – browse 4chan boards and catalogs in the terminal.

    Without a command, starts the interactive browser.
    """
    ctx.ensure_object(dict)
    ctx.obj["cfg"] = BrowserConfig(
        fourchan=FourChanConfig(
            api_base=api_base.rstrip("/"),
            image_base=image_base.rstrip("/"),
            timeout=timeout,
        ),
        log_file=log_file,
        verbose=verbose,
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(browse)


# ─── Commands ────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def browse(ctx: click.Context) -> None:
    """Start the interactive boards / threads browser.

    Keys: ↑/↓ move, Enter opens a board, Tab switches panels, r retries, q quits.
    """
    from .app import ChanBrowser

    cfg: BrowserConfig = ctx.obj["cfg"]
    _setup_logging(cfg.verbose, cfg.log_file, tui=True)
    ChanBrowser(cfg).run()


@cli.command(name="boards")
@click.pass_context
def list_boards(ctx: click.Context) -> None:
    """List all available 4chan boards."""
    cfg: BrowserConfig = ctx.obj["cfg"]
    _setup_logging(cfg.verbose, cfg.log_file, tui=False)
    with FourChanAPI(cfg.fourchan) as api:
        try:
            boards = api.get_boards()
        except FetchError as exc:
            console.print(f"[red]✗[/red] Could not load boards: {escape(str(exc))}")
            sys.exit(1)
    table = Table(title="4chan Boards", show_header=True, header_style="bold cyan")
    table.add_column("Board", style="bold")
    table.add_column("Title")
    table.add_column("Description", max_width=60)
    for b in boards:
        table.add_row(f"/{b.code}/", Text(b.title), Text(strip_markup(b.description)))
    console.print(table)


@cli.command(name="catalog")
@click.argument("selection")
@click.option("--limit", default=10, type=int, help="Number of threads to show (0 = all)")
@click.pass_context
def catalog(ctx: click.Context, selection: str, limit: int) -> None:
    """Preview a board's catalog.

    SELECTION is a board code or a boards line such as "g - Technology".

    Example: chanterm catalog g --limit 5
    """
    cfg: BrowserConfig = ctx.obj["cfg"]
    _setup_logging(cfg.verbose, cfg.log_file, tui=False)
    code = board_code(selection)
    with FourChanAPI(cfg.fourchan) as api:
        try:
            pages = api.get_catalog(selection)
        except FetchError as exc:
            console.print(f"[red]✗[/red] Could not load catalog: {escape(str(exc))}")
            sys.exit(1)

    table = Table(title=f"/{code}/ Catalog", show_header=True, header_style="bold cyan")
    table.add_column("No", style="bold", justify="right")
    table.add_column("Subject", max_width=40)
    table.add_column("Name")
    table.add_column("File")

    for count, t in enumerate(iter_threads(pages)):
        if limit > 0 and count >= limit:
            break
        table.add_row(str(t.id), Text(t.subject), Text(t.author), Text(t.attachment))
    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
