"""Turn raw ``href`` values into absolute, fully-qualified URLs."""

from __future__ import annotations

import re
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from linkcheck.errors import LinkResolutionError

_ABSOLUTE_RE = re.compile(r"^https?://", re.IGNORECASE)
_SKIP_RE = re.compile(r"^(javascript:|mailto:|tel:)", re.IGNORECASE)

# RFC 3986 reserved and unreserved characters plus "%" so existing escapes survive.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def is_navigable(raw: str) -> bool:
    """Return ``False`` for ``javascript:``, ``mailto:`` and ``tel:`` links."""
    return not _SKIP_RE.match(raw)


def is_probably_absolute(raw: str) -> bool:
    """Return ``True`` if *raw* already carries an http(s) scheme or is ``//host``."""
    return bool(_ABSOLUTE_RE.match(raw)) or raw.startswith("//")


def _percent_encode(url: str) -> str:
    """Escape characters such as spaces in the path, query and fragment of *url*."""
    parts = urlsplit(url)
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=_PATH_SAFE),
        quote(parts.query, safe=_QUERY_SAFE),
        quote(parts.fragment, safe=_QUERY_SAFE),
    ))


def resolve_href(raw: str, base_url: str) -> str:
    """Resolve *raw* against *base_url*.

    Precedence:

    * ``//host/path`` → base scheme prepended (``https://host/path``).
    * ``http://…`` / ``https://…`` → returned unchanged.
    * anything else → joined onto *base_url* with standard relative-URL
      semantics (``.``, ``..``, queries, fragments),
      then percent-encoded (``my page`` → ``my%20page``).

    Raises:
        LinkResolutionError: If *raw* or *base_url* cannot be parsed.
    """
    try:
        if raw.startswith("//"):
            scheme = urlsplit(base_url).scheme
            return f"{scheme}:{raw}"
        if is_probably_absolute(raw):
            return raw
        return _percent_encode(urljoin(base_url, raw))
    except ValueError as exc:
        raise LinkResolutionError(raw, str(exc)) from exc
