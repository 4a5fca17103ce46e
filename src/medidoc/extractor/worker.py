"""PDF worker endpoint resolution with ordered multi-URL fallback.

A PDF worker is an optional HTTP service that parses PDFs out of process.
Several candidate URLs may be configured; the resolver probes them in order
with HEAD requests and adopts the first one that answers with a status
below 400.  When none answer, or probing itself fails, the resolver
settles in the disabled state and PDFs are parsed locally instead.

Resolution happens once per resolver.  Concurrent callers that arrive
while the probe is running await the same probe task, so every caller
sees the same outcome.  The only later transition is ``disable()``, used
when a parse attributable to the worker fails.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from enum import Enum

import httpx

logger = logging.getLogger(__name__)


class WorkerState(Enum):
    """Lifecycle of a WorkerEndpointResolver."""

    UNINITIALIZED = "uninitialized"
    PROBING = "probing"
    RESOLVED = "resolved"
    DISABLED = "disabled"


class WorkerEndpointResolver:
    """Resolve and cache which candidate PDF worker URL is reachable.

    Args:
        candidate_urls: Worker URLs in preference order.
        http_client: Client used for the HEAD probes; owned by the caller.
        probe_timeout: Seconds allowed per probe.
    """

    def __init__(
        self,
        candidate_urls: Sequence[str],
        http_client: httpx.AsyncClient,
        probe_timeout: float = 5.0,
    ) -> None:
        self._candidates = tuple(candidate_urls)
        self._client = http_client
        self._probe_timeout = probe_timeout
        self._state = WorkerState.UNINITIALIZED
        self._url: str | None = None
        self._probe_task: asyncio.Future[None] | None = None
        self.probes_issued = 0

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def url(self) -> str | None:
        """The resolved worker URL, or None unless in the RESOLVED state."""
        return self._url if self._state is WorkerState.RESOLVED else None

    async def resolve(self) -> str | None:
        """Return the worker URL to use, probing candidates on first call.

        Returns:
            The first reachable candidate URL, or None when no candidate
            answered or the worker has been disabled.
        """
        if self._state in (WorkerState.RESOLVED, WorkerState.DISABLED):
            return self.url

        if self._probe_task is None:
            self._state = WorkerState.PROBING
            self._probe_task = asyncio.ensure_future(self._probe_candidates())

        await asyncio.shield(self._probe_task)
        return self.url

    def disable(self) -> None:
        """Force local parsing for the rest of this resolver's lifetime."""
        if self._state is not WorkerState.DISABLED:
            logger.warning(
                "Disabling PDF worker %s; PDFs will be parsed locally",
                self._url or "(unresolved)",
            )
        self._state = WorkerState.DISABLED

    async def _probe_candidates(self) -> None:
        found: str | None = None
        try:
            for url in self._candidates:
                if await self._is_reachable(url):
                    found = url
                    break
        except Exception:
            logger.exception("PDF worker probing failed; using local parsing")
            self._state = WorkerState.DISABLED
            return

        # disable() may have been called while probing
        if self._state is not WorkerState.PROBING:
            return

        if found is None:
            logger.warning(
                "No PDF worker reachable (%d candidates); using local parsing",
                len(self._candidates),
            )
            self._state = WorkerState.DISABLED
        else:
            logger.info("Using PDF worker at %s", found)
            self._url = found
            self._state = WorkerState.RESOLVED

    async def _is_reachable(self, url: str) -> bool:
        self.probes_issued += 1
        try:
            response = await self._client.head(
                url, timeout=self._probe_timeout, follow_redirects=True
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("PDF worker probe failed for %s: %s", url, exc)
            return False

        if response.status_code >= 400:
            logger.debug(
                "PDF worker probe for %s returned HTTP %d", url, response.status_code
            )
            return False
        return True
