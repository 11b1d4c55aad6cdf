from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from .exceptions import DictionaryFetchError, DictionaryFormatError

logger = logging.getLogger("localekit")

DEFAULT_TIMEOUT = 10.0


def is_remote(source: str, base_url: Optional[str] = None) -> bool:
    if source.startswith(("http://", "https://")):
        return True
    return bool(base_url)


def _parse_dictionary(text: str, source: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DictionaryFormatError(f"Invalid JSON in dictionary '{source}': {e}", source=source) from e
    if not isinstance(data, dict):
        raise DictionaryFormatError(f"Dictionary '{source}' must be a JSON object", source=source)
    return data


class DictionaryFetcher:
    """Default fetch capability: HTTP(S) through httpx, anything else from disk."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/") + "/" if base_url else None
        self._timeout = timeout
        self._http_client = client

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self._base_url or "",
                timeout=httpx.Timeout(self._timeout),
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def __call__(self, source: str) -> dict[str, Any]:
        if is_remote(source, self._base_url):
            return await self._fetch_http(source)
        return await self._read_file(source)

    async def _fetch_http(self, source: str) -> dict[str, Any]:
        client = self._get_http_client()
        try:
            response = await client.get(source)
        except httpx.TimeoutException as e:
            logger.error(f"Fetching dictionary {source} timed out: {e}")
            raise DictionaryFetchError(
                f"Fetching dictionary '{source}' timed out after {self._timeout}s", source=source
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch dictionary {source}: {e}")
            raise DictionaryFetchError(f"Unable to fetch dictionary '{source}'", source=source) from e
        if response.status_code >= 400:
            raise DictionaryFetchError(
                f"Dictionary request failed: {response.status_code}",
                source=source,
                status_code=response.status_code,
                detail=response.text,
            )
        return _parse_dictionary(response.text, source)

    async def _read_file(self, source: str) -> dict[str, Any]:
        path = Path(source).expanduser()
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            raise DictionaryFetchError(f"Unable to read dictionary '{source}': {e}", source=source) from e
        return _parse_dictionary(text, source)

    async def close(self) -> None:
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()


class HttpExistenceProbe:
    """Blocking existence check: HEAD for URLs, the filesystem otherwise.

    Only a 404 counts as missing. Transport failures are logged and treated
    as missing so asset resolution keeps its original path.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self._base_url = base_url.rstrip("/") + "/" if base_url else None
        self._timeout = timeout
        self._http_client = client

    def _get_http_client(self) -> httpx.Client:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.Client(
                base_url=self._base_url or "",
                timeout=httpx.Timeout(self._timeout),
            )
        return self._http_client

    def __call__(self, url: str) -> bool:
        if not is_remote(url, self._base_url):
            return Path(url).expanduser().exists()
        try:
            response = self._get_http_client().head(url)
        except httpx.HTTPError as e:
            logger.warning(f"Existence probe failed for {url}: {e}")
            return False
        return response.status_code != 404

    def close(self) -> None:
        if self._http_client is not None and not self._http_client.is_closed:
            self._http_client.close()


class AsyncHttpExistenceProbe:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/") + "/" if base_url else None
        self._timeout = timeout
        self._http_client = client

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self._base_url or "",
                timeout=httpx.Timeout(self._timeout),
            )
        return self._http_client

    async def __call__(self, url: str) -> bool:
        if not is_remote(url, self._base_url):
            return await asyncio.to_thread(Path(url).expanduser().exists)
        try:
            response = await self._get_http_client().head(url)
        except httpx.HTTPError as e:
            logger.warning(f"Existence probe failed for {url}: {e}")
            return False
        return response.status_code != 404

    async def close(self) -> None:
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()


__all__ = [
    "DictionaryFetcher",
    "HttpExistenceProbe",
    "AsyncHttpExistenceProbe",
    "is_remote",
    "DEFAULT_TIMEOUT",
]
