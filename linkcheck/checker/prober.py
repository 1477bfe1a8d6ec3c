"""Two-phase liveness probe for a single link.

Phase 1 sends a ``HEAD``.  A 200 is ``OK`` and any status >= 400 is
``NOT OK``; every other outcome (transport failure, 1xx/2xx-non-200/3xx,
redirect exhaustion) is inconclusive and moves on to phase 2.

Phase 2 sends a ``GET``.  200 is ``OK``, any other status is ``NOT OK``, and
a transport failure is classified by :func:`classify_error`.

Both phases share the client's timeout and redirect policy and never raise
on status; all statuses are inspected here.
"""

from __future__ import annotations

import asyncio
import socket
from typing import Iterator, Optional

import httpx
import typer

from linkcheck.checker.models import ProbeResult
from linkcheck.config import settings

_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


def make_client(max_connections: Optional[int] = None) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` configured for probing.

    *max_connections* should be at least the number of probes allowed in
    flight, otherwise httpx's own pool limit becomes the real bound.
    """
    cap = max_connections or settings.max_concurrency
    return httpx.AsyncClient(
        headers=settings.headers,
        timeout=settings.request_timeout,
        follow_redirects=True,
        max_redirects=settings.max_redirects,
        limits=httpx.Limits(max_connections=cap, max_keepalive_connections=cap),
    )


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* followed by its ``__cause__``/``__context__`` ancestors."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_dns_failure(exc: BaseException) -> bool:
    for err in _exception_chain(exc):
        if isinstance(err, socket.gaierror):
            return True
        message = str(err).lower()
        if any(marker in message for marker in _DNS_MARKERS):
            return True
    return False


def _is_timeout(exc: BaseException) -> bool:
    return any(
        isinstance(err, (httpx.TimeoutException, asyncio.TimeoutError))
        for err in _exception_chain(exc)
    )


def classify_error(url: str, exc: BaseException) -> ProbeResult:
    """Map a transport-level exception from the GET phase to a result.

    Checked in priority order: DNS failure, timeout, an attached HTTP
    response, the exception message, and finally ``unknown``.
    """
    if _is_dns_failure(exc):
        return ProbeResult.error(url, "DNS lookup failed")
    if _is_timeout(exc):
        return ProbeResult.error(url, "timeout")

    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if status_code:
        return ProbeResult.not_ok(url, status_code)

    message = str(exc)
    if message:
        return ProbeResult.error(url, message)
    return ProbeResult.error(url, "unknown")


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------

async def _head_phase(client: httpx.AsyncClient, url: str) -> Optional[ProbeResult]:
    """Return a conclusive result from ``HEAD``, or ``None`` to fall through."""
    try:
        response = await client.head(url)
    except Exception as exc:
        typer.echo(f"HEAD failed for {url}: {str(exc) or type(exc).__name__}", err=True)
        return None

    if response.status_code == 200:
        return ProbeResult.ok(url)
    if response.status_code >= 400:
        return ProbeResult.not_ok(url, response.status_code)
    return None


async def _get_phase(client: httpx.AsyncClient, url: str) -> ProbeResult:
    try:
        response = await client.get(url)
    except Exception as exc:
        return classify_error(url, exc)

    if response.status_code == 200:
        return ProbeResult.ok(url)
    return ProbeResult.not_ok(url, response.status_code)


async def probe(url: str, client: httpx.AsyncClient) -> ProbeResult:
    """Probe *url* with HEAD, falling back to GET when HEAD is inconclusive.

    Never raises for network or URL problems; they become ``ERROR`` results.
    """
    result = await _head_phase(client, url)
    if result is not None:
        return result
    return await _get_phase(client, url)
