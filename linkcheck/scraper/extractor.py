"""Link extraction: turns seed-page HTML into a deduplicated list of URLs."""

from __future__ import annotations

from typing import List

import typer
from bs4 import BeautifulSoup

from linkcheck.errors import LinkResolutionError
from linkcheck.scraper.resolver import is_navigable, resolve_href


def _iter_hrefs(html: str) -> List[str]:
    """Return the raw ``href`` of every ``<a>`` tag, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    hrefs: List[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        # Repeated attributes can come back as a list under some parsers.
        if isinstance(href, list):
            href = " ".join(href)
        hrefs.append(href.strip())
    return hrefs


def extract_links(html: str, base_url: str) -> List[str]:
    """Return the absolute URLs linked from *html*, deduplicated.

    Empty hrefs and ``javascript:``/``mailto:``/``tel:`` links are skipped.
    Hrefs that fail to resolve are reported on stderr and dropped; they never
    abort extraction.  Discovery order is preserved.
    """
    seen: set[str] = set()
    links: List[str] = []
    for raw in _iter_hrefs(html):
        if not raw or not is_navigable(raw):
            continue
        try:
            resolved = resolve_href(raw, base_url)
        except LinkResolutionError as exc:
            typer.echo(str(exc), err=True)
            continue
        if resolved not in seen:
            seen.add(resolved)
            links.append(resolved)
    return links
