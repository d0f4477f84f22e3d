"""HTTP fetcher for the published sheet ranges.

Both ranges are requested together on every refresh cycle; a cycle only
proceeds when both come back with a success status.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence, Tuple

import httpx

from ..config import FETCH_TIMEOUT_SECONDS, SOURCES, SheetSource

_log = logging.getLogger(__name__)


class SheetFetchError(Exception):
    """A sheet range could not be downloaded (transport error or non-2xx status)."""

    def __init__(self, message: str, source: str = "", status_code: int = 0) -> None:
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class SheetFetcher:
    """Downloads the raw CSV text of a pair of sheet sources."""

    def __init__(
        self,
        sources: Sequence[SheetSource] = SOURCES,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if len(sources) != 2:
            raise ValueError(f"expected two sheet sources, got {len(sources)}")
        self.sources = tuple(sources)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=FETCH_TIMEOUT_SECONDS,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SheetFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def fetch_text(self, source: SheetSource) -> str:
        """GET one source and return its body, raising SheetFetchError on failure."""
        _log.debug("fetching %s from %s", source.key, source.url)
        try:
            response = await self._client.get(source.url)
        except httpx.HTTPError as exc:
            raise SheetFetchError(f"{source.key}: {exc!r}", source=source.key) from exc
        if not response.is_success:
            _log.warning("%s responded with HTTP %d", source.key, response.status_code)
            raise SheetFetchError(
                f"{source.key}: HTTP {response.status_code}",
                source=source.key,
                status_code=response.status_code,
            )
        return response.text

    async def fetch_pair(self) -> Tuple[str, str]:
        """Fetch both sources concurrently and wait for both to settle.

        The first failure (in source order) is raised only after both
        requests have finished, so no request is left running unobserved.
        """
        results = await asyncio.gather(
            *(self.fetch_text(source) for source in self.sources),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        text_a, text_b = results
        return text_a, text_b
