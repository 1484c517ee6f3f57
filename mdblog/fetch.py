from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

import httpx

from .utils import join_url


class FetchError(Exception):
    """Raised when a static resource cannot be retrieved."""


class Fetcher(Protocol):
    async def fetch_text(self, path: str) -> str: ...


class HttpFetcher:
    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.base_url = base_url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def fetch_text(self, path: str) -> str:
        url = join_url(self.base_url, path)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc
        if not response.is_success:
            raise FetchError(f"GET {url} returned {response.status_code}")
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


class FileFetcher:
    def __init__(self, root: Path):
        self.root = Path(root)

    async def fetch_text(self, path: str) -> str:
        root = self.root.resolve()
        target = (root / path.lstrip("/")).resolve()
        if not target.is_relative_to(root):
            raise FetchError(f"Refusing to read outside site root: {path}")
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Cannot read {target}: {exc}") from exc
