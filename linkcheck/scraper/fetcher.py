"""HTTP fetcher for the seed page."""

from __future__ import annotations

from typing import Optional

import httpx

from linkcheck.config import settings
from linkcheck.errors import FetchError
from linkcheck.scraper.models import RawPage


def fetch_url(url: str, timeout: Optional[float] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    A single GET with a fixed timeout; no retries.  Any transport failure or
    4xx/5xx status is wrapped in :class:`FetchError`, keeping the original
    exception as ``__cause__``.

    Raises:
        FetchError: If the page cannot be downloaded.
    """
    try:
        with httpx.Client(
            headers=settings.headers,
            timeout=settings.request_timeout if timeout is None else timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
            html = response.text
            status_code = response.status_code
    except httpx.HTTPError as exc:
        raise FetchError(url, str(exc) or type(exc).__name__) from exc
    except httpx.InvalidURL as exc:
        raise FetchError(url, str(exc)) from exc

    return RawPage(url=url, html=html, status_code=status_code)
