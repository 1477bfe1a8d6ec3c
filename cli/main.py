"""LinkCheck CLI — check every hyperlink on a single web page.

Usage:
    python cli/main.py <url>

Progress and diagnostics go to stderr; one ``<url> -> <status>`` line per
link goes to stdout as soon as that link's probe finishes.

Exit codes:
    0  every link was checked (or the page had no links)
    1  the seed page could not be fetched, or an unexpected error occurred
    2  usage error (wrong number of arguments, invalid URL)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkcheck.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from urllib.parse import urlsplit

import typer

from linkcheck.checker import check_links
from linkcheck.config import settings
from linkcheck.errors import FetchError
from linkcheck.scraper import extract_links, fetch_url

app = typer.Typer(
    name="linkcheck",
    help="Fetch a page and report which of its links are reachable.",
    add_completion=False,
)


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------
def _validate_seed(value: str) -> str:
    """Normalise the seed URL; ``//host`` gets an implicit ``https:``."""
    typer.echo("Script started...", err=True)
    url = value.strip()
    if url.startswith("//"):
        url = "https:" + url
    try:
        parts = urlsplit(url)
    except ValueError:
        raise typer.BadParameter(f"Invalid URL: {value}")
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise typer.BadParameter(f"Invalid URL: {value}")
    return url


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
def _run(url: str) -> int:
    """Fetch, extract and probe; return the process exit code."""
    typer.echo(f"Fetching: {url}", err=True)
    try:
        raw = fetch_url(url)
    except FetchError as exc:
        typer.echo(f"Error fetching page: {exc}", err=True)
        return 1
    typer.echo(f"HTML length: {len(raw.html)}", err=True)

    links = extract_links(raw.html, url)
    typer.echo(f"Links found: {len(links)}", err=True)

    if not links:
        typer.echo("No links found.")
        return 0

    typer.echo(
        f"Checking {len(links)} with maximum of {settings.max_concurrency} "
        "links in parallel ...",
        err=True,
    )

    asyncio.run(check_links(links, on_result=lambda result: typer.echo(result.line())))
    return 0


@app.command()
def check(
    url: str = typer.Argument(
        ..., help="Page to check, e.g. https://example.com/.", callback=_validate_seed
    ),
) -> None:
    """Check every link on URL with HEAD (then GET) requests."""
    try:
        code = _run(url)
    except Exception as exc:
        typer.echo(f"Unhandled error: {exc}", err=True)
        code = 1
    if code:
        raise typer.Exit(code=code)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
