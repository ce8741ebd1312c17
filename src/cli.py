"""Command-line entrypoint: process scrape inputs, fetch pages, run the API."""

from __future__ import annotations

import asyncio
import logging
import sys

import typer

from src.config import get_settings
from src.logging_config import setup_logging
from src.scrape import (
    FetchError,
    InputHandler,
    ScrapeInputError,
    fetch_data,
    format_scraped_content,
    preview,
    scrape,
)

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Scrape input processing and single-page fetch.")


def _parse_headers(values: list[str]) -> dict[str, str]:
    """Turn repeated ``Name: value`` options into a header mapping."""
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected 'Name: value', got {raw!r}", param_hint="--header")
        headers[name.strip()] = value.strip()
    return headers


@app.callback()
def main(
    log_level: str = typer.Option("", "--log-level", help="Override LOG_LEVEL."),
) -> None:
    settings = get_settings()
    setup_logging(log_level or settings.log_level, stream=sys.stderr)


@app.command("scrape")
def scrape_command(
    url: str = typer.Argument(..., help="Target URL."),
    allowed_domain: list[str] = typer.Option([], "--allowed-domain", "-d", help="Allowed domain (repeatable)."),
    header: list[str] = typer.Option([], "--header", "-H", help="Request header as 'Name: value' (repeatable)."),
    extract: list[str] = typer.Option([], "--extract", "-e", help="Field to extract: title, meta, text or links."),
    run: bool = typer.Option(False, "--run", help="Also fetch the page and print the extracted content."),
) -> None:
    """Process a scrape input and print it."""
    config = {
        "allowed_domains": allowed_domain,
        "headers": _parse_headers(header),
        "extract": extract,
    }

    handler = InputHandler()
    try:
        scrape_input = handler.process_scrape(url, config)
    except ScrapeInputError as exc:
        logger.error("Error processing scrape input: %s", exc, extra={"url": url})
        raise typer.Exit(code=1) from exc

    typer.echo(f"Scrape Input: {scrape_input}")
    if not run:
        return

    settings = get_settings()
    try:
        page = asyncio.run(
            scrape(scrape_input, timeout=settings.http_timeout_seconds, user_agent=settings.user_agent)
        )
    except FetchError as exc:
        typer.echo(f"Error fetching data: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(format_scraped_content(page))


@app.command("fetch")
def fetch_command(
    url: str = typer.Argument(..., help="URL to GET."),
    header: list[str] = typer.Option([], "--header", "-H", help="Request header as 'Name: value' (repeatable)."),
) -> None:
    """Fetch a URL once and print the start of its body."""
    headers = _parse_headers(header)
    settings = get_settings()
    try:
        data = asyncio.run(
            fetch_data(url, headers, timeout=settings.http_timeout_seconds, user_agent=settings.user_agent)
        )
    except FetchError as exc:
        typer.echo(f"Error fetching data: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(f"Fetched data: {preview(data, settings.preview_length)}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("src.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    app()
