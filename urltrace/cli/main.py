"""Main entry point for the urltrace command."""

import sys

import typer

from urltrace._version import __version__
from urltrace.config.settings import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    ConfigurationError,
    Settings,
    build_settings,
)
from urltrace.core.http_client import HTTPClientFactory
from urltrace.core.logging import get_logger, setup_logging
from urltrace.services.tracer import URLTracer


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"urltrace {__version__}")
        raise typer.Exit()


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=False,
)

logger = get_logger(__name__)


def configure_logging(settings: Settings) -> None:
    """Apply the logging section of the settings."""
    log_settings = settings.logging
    setup_logging(
        json_logs=log_settings.format == "json",
        log_level_name=log_settings.level,
        show_time=log_settings.show_time,
        colors=log_settings.format == "auto" and sys.stderr.isatty(),
    )


@app.command()
def trace(
    urls: list[str] = typer.Argument(
        ...,
        help="One or more URLs to trace. URLs without a scheme are requested over http.",
        metavar="URL...",
    ),
    timeout: int = typer.Option(
        DEFAULT_TIMEOUT,
        "--timeout",
        "-t",
        min=0,
        help="Sets the timeout in seconds for a requested URL (0 disables it)",
    ),
    full_url: bool = typer.Option(
        False,
        "--full-url",
        "-f",
        help="Display the entire URL, not the host portion.",
    ),
    max_redirects: int = typer.Option(
        DEFAULT_MAX_REDIRECTS,
        "--max-redirects",
        min=0,
        help="Maximum number of redirects to follow per URL",
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_format: str = typer.Option(
        "auto",
        "--log-format",
        help="Log rendering: auto, plain or json",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Trace the redirect path of one or more URLs.

    Every round trip of a redirect chain is logged with its status code and
    host, so the URLs needed to reach the final page can be identified.

    Examples:
        urltrace http://www.google.com/mail
        urltrace --timeout 15 http://www.google.com/mail
        urltrace -t 15 -f http://www.google.com/mail
    """
    # Defaults until the logging settings are known
    setup_logging()

    try:
        settings = build_settings(
            trace={
                "timeout": timeout,
                "full_url": full_url,
                "max_redirects": max_redirects,
            },
            logging={"level": log_level, "format": log_format},
        )
    except ConfigurationError as e:
        logger.critical("%s", e)
        raise typer.Exit(1) from e

    configure_logging(settings)

    with HTTPClientFactory.managed_client(settings) as client:
        results = URLTracer(client).trace_all(urls)

    logger.debug(
        "trace_finished",
        traced=len(results),
        failed=sum(1 for result in results if not result.ok),
    )


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    sys.exit(app())
