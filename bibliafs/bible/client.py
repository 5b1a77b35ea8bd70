"""ABíbliaDigital Bible text API client

Overview
--------
Thin async HTTP client for the ABíbliaDigital REST API with a retry policy and
a bundled fallback for the chapters and book list the app cannot live without.

Retry policy
------------
- Up to ``retries + 1`` attempts per request.
- Only HTTP 5xx, HTTP 429 and transport failures are retried.
- Timeouts are not retried.
- Backoff between attempts is ``retry_delay * 2 ** (attempt - 1)`` seconds.
- A JSON body carrying ``error`` or ``err`` is a non-retryable failure.

Fallbacks
---------
- ``get_chapter`` serves a bundled chapter when the upstream fails or returns no
  verses, and raises ``BibleContentUnavailableError`` when nothing is bundled.
- ``list_books`` serves the bundled 66-book catalogue on any failure.
- ``get_verse`` and ``search`` have no fallback.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .books import BIBLE_BOOKS
from .errors import BibleApiError, BibleContentUnavailableError
from .fallback import get_fallback_chapter


class BibleApiClient:
    """Async client for Bible chapters, verses, search and the book list."""

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 8.0,
        retries: int = 2,
        retry_delay: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create a Bible API client.

        Args:
            base_url: API base URL (e.g., ``https://www.abibliadigital.com.br/api``).
            token: Optional bearer token for authenticated rate limits.
            timeout: Per-request timeout in seconds for the internal client.
            retries: Retries after the first attempt.
            retry_delay: Base backoff delay in seconds.
            client: Optional preconfigured ``httpx.AsyncClient`` to use.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.retries = max(0, retries)
        self.retry_delay = retry_delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request_once(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = await self._client.get(url, headers=self._headers())
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise BibleApiError(f"Request timeout: {url}", status_code=408, retryable=False) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise BibleApiError(
                f"HTTP {status_code} from Bible API",
                status_code=status_code,
                details=e.response.text,
                retryable=status_code >= 500 or status_code == 429,
            ) from e
        except httpx.TransportError as e:
            raise BibleApiError(f"Transport error: {e}", retryable=True) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise BibleApiError("Bible API returned invalid JSON", status_code=resp.status_code) from e

        if isinstance(data, dict) and (data.get("error") or data.get("err")):
            raise BibleApiError(
                str(data.get("error") or data.get("err")),
                status_code=resp.status_code,
                details=data,
                retryable=False,
            )
        return data

    async def _fetch_json(self, path: str) -> Any:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._request_once(path)
            except BibleApiError as e:
                self._logger.warning(f"Bible API request failed (attempt {attempt}/{self.retries + 1}): {path}: {e}")
                if not e.retryable or attempt > self.retries:
                    raise
                delay = self.retry_delay * (2 ** (attempt - 1))
                self._logger.debug(f"Retrying {path} in {delay:.1f}s")
                await asyncio.sleep(delay)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_chapter(self, version: str, abbrev: str, chapter: int) -> Dict[str, Any]:
        """Fetch a chapter, falling back to the bundled copy.

        Raises:
            BibleContentUnavailableError: Upstream failed and nothing is bundled.
        """
        cause: Optional[BibleApiError] = None
        try:
            data = await self._fetch_json(f"/verses/{version}/{abbrev}/{chapter}")
            if isinstance(data, dict) and data.get("verses"):
                return data
            self._logger.warning(f"Empty verses from Bible API for {version}-{abbrev}-{chapter}")
        except BibleApiError as e:
            cause = e

        fallback = get_fallback_chapter(version, abbrev, chapter)
        if fallback is not None:
            self._logger.info(f"Serving bundled chapter {version}-{abbrev}-{chapter}")
            return fallback
        raise BibleContentUnavailableError(version, abbrev, chapter, cause=cause)

    async def get_verse(self, version: str, abbrev: str, chapter: int, verse: int) -> Dict[str, Any]:
        return await self._fetch_json(f"/verses/{version}/{abbrev}/{chapter}/{verse}")

    async def search(self, version: str, query: str) -> Any:
        return await self._fetch_json(f"/verses/{version}/search/{quote(query, safe='')}")

    async def list_books(self) -> List[Dict[str, Any]]:
        """Book list from the API, or the bundled catalogue on any failure."""
        try:
            books = await self._fetch_json("/books")
        except BibleApiError as e:
            self._logger.warning(f"Falling back to bundled book list: {e}")
            return BIBLE_BOOKS
        if not isinstance(books, list) or not books:
            return BIBLE_BOOKS
        return books
