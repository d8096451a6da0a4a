"""
Read-only content collaborator for the context dispatcher.

Three reads, with deliberately different failure behaviour:

- ``read_profile`` and ``read_post_summaries`` never fail: any storage or
  decoding error is logged and a built-in default document is returned.
- ``read_post_body`` answers ``Found`` or ``NotFound``; storage errors are
  reported as ``NotFound`` so callers only handle one absence path.

``FileContentStore`` lays the data out as::

    <data_dir>/profile.json
    <data_dir>/posts/index.json
    <data_dir>/posts/<post_id>.md
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
from fastapi import Depends

from ..config import Settings, get_settings

logger = logging.getLogger("context_server.content")

DEFAULT_PROFILE: Dict[str, Any] = {
    "name": "Naoki Izawa",
    "bio": "Engineer interested in TypeScript and MCP.",
    "website": "https://example.com",
}

DEFAULT_POST_SUMMARIES: List[Dict[str, Any]] = [
    {
        "id": "post-1",
        "title": "Building an MCP server",
        "date": "2023-04-09",
        "summary": "Notes on writing a Model Context Protocol server...",
    },
    {
        "id": "post-2",
        "title": "Handy TypeScript features",
        "date": "2023-04-01",
        "summary": "Type-safe development...",
    },
]


@dataclass(frozen=True)
class Found:
    value: str


@dataclass(frozen=True)
class NotFound:
    key: str


PostBodyLookup = Union[Found, NotFound]


class ContentStore(ABC):
    @abstractmethod
    async def read_profile(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def read_post_summaries(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def read_post_body(self, post_id: str) -> PostBodyLookup:
        ...


class FileContentStore(ContentStore):
    def __init__(self, data_dir: Union[str, Path]) -> None:
        self.data_dir = Path(data_dir)
        self.posts_dir = self.data_dir / "posts"

    async def _read_text(self, path: Path) -> str:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    async def read_profile(self) -> Dict[str, Any]:
        path = self.data_dir / "profile.json"
        try:
            return json.loads(await self._read_text(path))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read profile data from {path}: {e}")
            return dict(DEFAULT_PROFILE)

    async def read_post_summaries(self) -> List[Dict[str, Any]]:
        path = self.posts_dir / "index.json"
        try:
            return json.loads(await self._read_text(path))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read blog post list from {path}: {e}")
            return [dict(summary) for summary in DEFAULT_POST_SUMMARIES]

    def _post_path(self, post_id: str) -> Optional[Path]:
        """Map a post id to its Markdown file, or None if it would leave posts/."""
        if not post_id or "\x00" in post_id or "/" in post_id or "\\" in post_id:
            return None
        if post_id in {".", ".."}:
            return None

        path = (self.posts_dir / f"{post_id}.md").resolve()
        if not path.is_relative_to(self.posts_dir.resolve()):
            return None
        return path

    async def read_post_body(self, post_id: str) -> PostBodyLookup:
        path = self._post_path(post_id)
        if path is None:
            logger.warning(f"Rejected blog post id: {post_id!r}")
            return NotFound(post_id)

        try:
            return Found(await self._read_text(path))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read blog post content for id '{post_id}': {e}")
            return NotFound(post_id)


@lru_cache
def _store_for(data_dir: str) -> ContentStore:
    return FileContentStore(data_dir)


def get_content_store(settings: Settings = Depends(get_settings)) -> ContentStore:
    """One store per data directory, taken from the app's settings."""
    return _store_for(settings.data_dir)
