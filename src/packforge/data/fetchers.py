"""Document fetchers used by the game data loader.

A fetcher turns a document location into raw text. The loader only depends on
the :class:`DocumentFetcher` protocol, so documents can come from disk, over
HTTP, or from memory.
"""
from __future__ import annotations

import asyncio
import urllib.error
import urllib.request
from pathlib import Path
from typing import Mapping, Protocol

from .errors import DataLoadError
from .json_loader import read_text


class DocumentFetcher(Protocol):
    """Anything that can asynchronously return the text behind a location."""

    async def fetch(self, location: str) -> str:  # pragma: no cover - protocol
        ...


class FileFetcher:
    """Reads documents from the local file system."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None

    def resolve(self, location: str) -> Path:
        path = Path(location)
        if self._base_path is not None and not path.is_absolute():
            return self._base_path / path
        return path

    async def fetch(self, location: str) -> str:
        path = self.resolve(location)
        try:
            return await asyncio.to_thread(read_text, path)
        except DataLoadError as exc:
            raise DataLoadError(location, exc.reason) from exc


class UrlFetcher:
    """Fetches documents over HTTP(S) with ``urllib``."""

    def __init__(self, base_url: str = "", *, timeout: float | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def resolve(self, location: str) -> str:
        if "://" in location or not self._base_url:
            return location
        return f"{self._base_url}/{location.lstrip('/')}"

    async def fetch(self, location: str) -> str:
        return await asyncio.to_thread(self._fetch_sync, location)

    def _fetch_sync(self, location: str) -> str:
        url = self.resolve(location)
        try:
            with urllib.request.urlopen(url, timeout=self._timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as exc:
            raise DataLoadError(location, f"HTTP {exc.code} {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise DataLoadError(location, f"fetch failed: {exc.reason}") from exc
        except OSError as exc:
            raise DataLoadError(location, f"fetch failed: {exc}") from exc
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DataLoadError(location, f"read error: {exc}") from exc


class MappingFetcher:
    """Serves documents from an in-memory mapping of location to text."""

    def __init__(self, documents: Mapping[str, str]) -> None:
        self._documents = dict(documents)
        self.fetch_count = 0

    async def fetch(self, location: str) -> str:
        self.fetch_count += 1
        try:
            return self._documents[location]
        except KeyError as exc:
            raise DataLoadError(location, "fetch failed: no such document") from exc
