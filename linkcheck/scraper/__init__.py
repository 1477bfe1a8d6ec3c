"""Scraper package — seed page fetch & link extraction."""

from linkcheck.scraper.extractor import extract_links
from linkcheck.scraper.fetcher import fetch_url
from linkcheck.scraper.models import RawPage
from linkcheck.scraper.resolver import resolve_href

__all__ = ["fetch_url", "extract_links", "resolve_href", "RawPage"]
