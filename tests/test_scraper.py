"""Tests for the scraper stage (seed fetch, URL resolution, link extraction).

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_url`` tests.
- Resolution and extraction are pure functions and are tested directly.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from linkcheck.errors import FetchError, LinkResolutionError
from linkcheck.scraper.extractor import _iter_hrefs, extract_links
from linkcheck.scraper.fetcher import fetch_url
from linkcheck.scraper.models import RawPage
from linkcheck.scraper.resolver import is_navigable, is_probably_absolute, resolve_href


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_BASE = "https://example.com/dir/page.html"

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Test Page</title></head>
<body>
  <main>
    <a href="https://example.com/page1">Link 1</a>
    <a href="sub">Relative</a>
    <a href="//cdn.example.com/x">Protocol-relative</a>
    <a href="mailto:a@b.com">Mail</a>
    <a href="javascript:void(0)">Script</a>
    <a href="tel:+1234">Phone</a>
    <a name="no-href">Anchor without href</a>
  </main>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# fetch_url tests
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get("https://example.com/article").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            raw = fetch_url("https://example.com/article")

        assert isinstance(raw, RawPage)
        assert raw.url == "https://example.com/article"
        assert raw.status_code == 200
        assert "<title>Test Page</title>" in raw.html

    def test_http_error_raises_fetch_error(self) -> None:
        """A 404 on the seed page is a fetch failure, not a page to parse."""
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with pytest.raises(FetchError) as excinfo:
                fetch_url("https://example.com/missing")

        assert str(excinfo.value).startswith("Fetch failed for https://example.com/missing:")
        assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

    def test_connection_error_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://down.example.com/").mock(
                side_effect=httpx.ConnectError("Connection refused")
            )
            with pytest.raises(FetchError) as excinfo:
                fetch_url("https://down.example.com/")

        assert "Connection refused" in str(excinfo.value)
        assert excinfo.value.url == "https://down.example.com/"

    def test_timeout_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://slow.example.com/").mock(
                side_effect=httpx.ReadTimeout("timed out")
            )
            with pytest.raises(FetchError):
                fetch_url("https://slow.example.com/")

    def test_sends_user_agent(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="<html></html>")
            )
            fetch_url("https://example.com/")

        assert "LinkCheck-Bot" in route.calls.last.request.headers["User-Agent"]


# ---------------------------------------------------------------------------
# Resolver unit tests
# ---------------------------------------------------------------------------

class TestResolveHref:
    def test_relative_resolves_against_base_directory(self) -> None:
        assert resolve_href("sub", _BASE) == "https://example.com/dir/sub"

    def test_protocol_relative_gets_base_scheme(self) -> None:
        assert resolve_href("//cdn.example.com/x", _BASE) == "https://cdn.example.com/x"

    def test_protocol_relative_keeps_http_base_scheme(self) -> None:
        assert (
            resolve_href("//cdn.example.com/x", "http://example.com/")
            == "http://cdn.example.com/x"
        )

    def test_absolute_is_unchanged(self) -> None:
        assert resolve_href("https://other.com/y", _BASE) == "https://other.com/y"

    def test_absolute_scheme_is_case_insensitive(self) -> None:
        assert resolve_href("HTTP://Other.com/Y", _BASE) == "HTTP://Other.com/Y"

    def test_dot_segments(self) -> None:
        assert resolve_href("../up.html", _BASE) == "https://example.com/up.html"
        assert resolve_href("./here", _BASE) == "https://example.com/dir/here"

    def test_root_relative(self) -> None:
        assert resolve_href("/a", _BASE) == "https://example.com/a"

    def test_query_and_fragment(self) -> None:
        assert resolve_href("?q=1", _BASE) == "https://example.com/dir/page.html?q=1"
        assert resolve_href("#top", _BASE) == "https://example.com/dir/page.html#top"

    def test_relative_href_is_percent_encoded(self) -> None:
        assert resolve_href("my page.html", _BASE) == "https://example.com/dir/my%20page.html"

    def test_existing_escapes_are_kept(self) -> None:
        assert resolve_href("/a%20b?q=x y", _BASE) == "https://example.com/a%20b?q=x%20y"

    def test_malformed_href_raises(self) -> None:
        with pytest.raises(LinkResolutionError) as excinfo:
            resolve_href("ftp://[oops", _BASE)

        assert excinfo.value.raw == "ftp://[oops"
        assert str(excinfo.value).startswith('Failed to resolve link "ftp://[oops":')


class TestSchemeHelpers:
    @pytest.mark.parametrize(
        "href", ["mailto:a@b.com", "javascript:void(0)", "tel:+1234", "MAILTO:X@Y.Z"]
    )
    def test_non_navigable(self, href: str) -> None:
        assert is_navigable(href) is False

    def test_navigable(self) -> None:
        assert is_navigable("/page") is True

    def test_probably_absolute(self) -> None:
        assert is_probably_absolute("https://a.com") is True
        assert is_probably_absolute("//a.com") is True
        assert is_probably_absolute("a.com/page") is False


# ---------------------------------------------------------------------------
# Extractor tests
# ---------------------------------------------------------------------------

class TestIterHrefs:
    def test_only_anchors_with_href(self) -> None:
        hrefs = _iter_hrefs(_SIMPLE_HTML)
        assert len(hrefs) == 6

    def test_strips_whitespace(self) -> None:
        assert _iter_hrefs('<a href="  /x  ">x</a>') == ["/x"]


class TestExtractLinks:
    def test_resolves_all_three_shapes(self) -> None:
        links = extract_links(_SIMPLE_HTML, _BASE)
        assert links == [
            "https://example.com/page1",
            "https://example.com/dir/sub",
            "https://cdn.example.com/x",
        ]

    def test_excludes_non_navigable_schemes(self) -> None:
        links = extract_links(_SIMPLE_HTML, _BASE)
        assert not any(
            lnk.lower().startswith(("mailto:", "javascript:", "tel:")) for lnk in links
        )

    def test_deduplicates_identical_hrefs(self) -> None:
        html = '<a href="/a">1</a><a href="/a">2</a>'
        assert extract_links(html, _BASE) == ["https://example.com/a"]

    def test_deduplicates_after_resolution(self) -> None:
        """Different raw hrefs that resolve to the same URL collapse to one."""
        html = (
            '<a href="/a">1</a>'
            '<a href="https://example.com/a">2</a>'
            '<a href="sub">3</a>'
            '<a href="./sub">4</a>'
        )
        assert extract_links(html, _BASE) == [
            "https://example.com/a",
            "https://example.com/dir/sub",
        ]

    def test_deduplicates_encoded_and_unencoded_spaces(self) -> None:
        html = '<a href="/a b">1</a><a href="/a%20b">2</a>'
        assert extract_links(html, _BASE) == ["https://example.com/a%20b"]

    def test_empty_href_skipped(self) -> None:
        assert extract_links('<a href="">empty</a><a href="   ">blank</a>', _BASE) == []

    def test_malformed_href_is_logged_and_dropped(self, capsys) -> None:
        html = '<a href="ftp://[oops">bad</a><a href="/ok">ok</a>'
        links = extract_links(html, _BASE)

        assert links == ["https://example.com/ok"]
        err = capsys.readouterr().err
        assert 'Failed to resolve link "ftp://[oops"' in err

    def test_no_links_returns_empty(self) -> None:
        assert extract_links("<html><body>no links</body></html>", _BASE) == []
