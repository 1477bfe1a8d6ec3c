"""Bounded-concurrency fan-out of link probes.

Every link gets its own task up front; an :class:`asyncio.Semaphore` admits
at most ``min(len(links), cap)`` of them into :func:`probe` at a time, and
waiting tasks are admitted in FIFO order as slots free up.  Results are
handed back in completion order.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, List, Optional, Sequence

import httpx

from linkcheck.checker.models import ProbeResult
from linkcheck.checker.prober import make_client, probe
from linkcheck.config import settings


def effective_concurrency(n_links: int, limit: Optional[int] = None) -> int:
    """Return the admission-gate size for *n_links* probes (at least 1)."""
    cap = settings.max_concurrency if limit is None else limit
    return max(1, min(n_links, cap))


async def iter_probe_results(
    links: Sequence[str],
    *,
    client: Optional[httpx.AsyncClient] = None,
    limit: Optional[int] = None,
) -> AsyncIterator[ProbeResult]:
    """Probe every URL in *links* and yield each result as it completes.

    When *client* is ``None`` a probing client is created for the run and
    closed afterwards.
    """
    links = list(links)
    if not links:
        return

    size = effective_concurrency(len(links), limit)
    gate = asyncio.Semaphore(size)
    owns_client = client is None
    if owns_client:
        client = make_client(size)

    async def _bounded(url: str) -> ProbeResult:
        async with gate:
            return await probe(url, client)

    tasks = [asyncio.ensure_future(_bounded(url)) for url in links]
    try:
        for next_done in asyncio.as_completed(tasks):
            yield await next_done
    finally:
        # Only reached with pending tasks if the consumer stopped early.
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        if owns_client:
            await client.aclose()


async def check_links(
    links: Sequence[str],
    *,
    client: Optional[httpx.AsyncClient] = None,
    limit: Optional[int] = None,
    on_result: Optional[Callable[[ProbeResult], None]] = None,
) -> List[ProbeResult]:
    """Probe all *links* and return the results in completion order.

    *on_result* is called with each result the moment it is available, so
    output can be streamed instead of waiting for the whole batch.
    """
    results: List[ProbeResult] = []
    async for result in iter_probe_results(links, client=client, limit=limit):
        if on_result is not None:
            on_result(result)
        results.append(result)
    return results
