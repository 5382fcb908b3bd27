"""Command line entry point for the confluence-gateway command.

A thin Typer application over ConfluenceGateway: each command runs one
logical operation and prints the result as JSON using Rich. Failures are
printed in red and turned into meaningful exit codes.
"""

import dataclasses
import json
import logging
import sys
from enum import IntEnum
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .client import ConfluenceGateway
from .config import GatewayConfig
from .errors import ConfluenceError, FailureKind, GatewayError
from .models import CommentOptions, PageOptions, SearchOptions, SpaceListOptions

app = typer.Typer(
    name="confluence-gateway",
    help="Search and read Confluence through the legacy and v2 REST APIs.",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Exit codes for CLI commands.

    - SUCCESS (0): Command completed successfully
    - GENERAL_ERROR (1): Configuration, validation or HTTP failure
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


_EXIT_CODES = {
    FailureKind.AUTHENTICATION: ExitCode.AUTH_ERROR,
    FailureKind.PERMISSION: ExitCode.AUTH_ERROR,
    FailureKind.NETWORK: ExitCode.NETWORK_ERROR,
    FailureKind.SERVICE_UNAVAILABLE: ExitCode.NETWORK_ERROR,
    FailureKind.RATE_LIMITED: ExitCode.NETWORK_ERROR,
}


def exit_code_for(error: ConfluenceError) -> ExitCode:
    """Pick the exit code for a mapped failure."""
    return _EXIT_CODES.get(error.kind, ExitCode.GENERAL_ERROR)


def _configure_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger so third-party libraries
    keep their own settings.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)8s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)


def _print_json(data: Any) -> None:
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        data = dataclasses.asdict(data)
    Console().print_json(json.dumps(data, default=str))


def _run(verbosity: int, action) -> None:
    """Build a gateway from the environment, run action and print its result."""
    _configure_logging(verbosity)
    err_console = Console(stderr=True, highlight=False)

    try:
        gateway = ConfluenceGateway(GatewayConfig.from_env())
        result = action(gateway)
    except ConfluenceError as e:
        logger.debug(f"Command failed: {e!r}")
        err_console.print(f"[red]✗[/red] {escape(e.message)}", style="red")
        raise typer.Exit(exit_code_for(e))
    except GatewayError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}", style="red")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if result is not None:
        _print_json(result)
    raise typer.Exit(ExitCode.SUCCESS)


VerboseOption = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity")


@app.command()
def search(
    query: str = typer.Argument("", help="CQL query (empty searches everything)"),
    space: Optional[str] = typer.Option(None, "--space", help="Space key filter"),
    content_type: Optional[str] = typer.Option(None, "--type", help="page or blogpost"),
    order_by: Optional[str] = typer.Option(
        None, "--order-by", help="relevance, created, modified or title"
    ),
    limit: int = typer.Option(25, "--limit", help="Results per page"),
    start: int = typer.Option(0, "--start", help="Offset of the first result"),
    verbose: int = VerboseOption,
) -> None:
    """Search content with CQL (legacy API)."""
    options = SearchOptions(
        space_key=space,
        content_type=content_type,
        limit=limit,
        start=start,
        order_by=order_by,
    )
    _run(verbose, lambda gateway: gateway.search(query, options))


@app.command()
def spaces(
    space_type: Optional[str] = typer.Option(None, "--type", help="global or personal"),
    limit: int = typer.Option(25, "--limit", help="Results per page"),
    start: int = typer.Option(0, "--start", help="Offset of the first result"),
    verbose: int = VerboseOption,
) -> None:
    """List spaces (v2 API)."""
    options = SpaceListOptions(space_type=space_type, limit=limit, start=start)
    _run(verbose, lambda gateway: gateway.get_spaces(options))


@app.command()
def page(
    page_id: str = typer.Argument(..., help="Numeric page ID"),
    no_content: bool = typer.Option(False, "--no-content", help="Skip the page body"),
    expand: Optional[List[str]] = typer.Option(None, "--expand", help="Property to expand"),
    verbose: int = VerboseOption,
) -> None:
    """Fetch a page (v2 API)."""
    options = PageOptions(include_content=not no_content, expand=expand or None)
    _run(verbose, lambda gateway: gateway.get_page(page_id, options))


@app.command()
def comments(
    page_id: str = typer.Argument(..., help="Numeric page ID"),
    order_by: Optional[str] = typer.Option(None, "--order-by", help="created or updated"),
    limit: int = typer.Option(25, "--limit", help="Results per page"),
    start: int = typer.Option(0, "--start", help="Offset of the first result"),
    verbose: int = VerboseOption,
) -> None:
    """List a page's comments (v2 API)."""
    options = CommentOptions(limit=limit, start=start, order_by=order_by)
    _run(verbose, lambda gateway: gateway.get_page_comments(page_id, options))


@app.command()
def routes(verbose: int = VerboseOption) -> None:
    """Show which API version serves each operation."""
    _run(verbose, lambda gateway: gateway.routing_info())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
