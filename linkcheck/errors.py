"""Exception types raised by the link-checking pipeline."""

from __future__ import annotations


class LinkCheckError(Exception):
    """Base class for all link checker errors."""


class FetchError(LinkCheckError):
    """The seed page could not be downloaded.

    Fatal for the whole run: without the page there is nothing to check.
    """

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"Fetch failed for {url}: {message}")


class LinkResolutionError(LinkCheckError):
    """A single raw ``href`` could not be turned into an absolute URL."""

    def __init__(self, raw: str, message: str) -> None:
        self.raw = raw
        self.reason = message
        super().__init__(f'Failed to resolve link "{raw}": {message}')
