"""Data models for the scraper stage."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawPage:
    """The raw HTTP response for the seed URL fetch."""

    url: str
    html: str
    status_code: int
