"""
Tag-keyed response cache for the public listing endpoints.

Mutations invalidate the tag of the content kind they touch. The cache is
never authoritative: Redis faults are logged and treated as misses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import redis
from redis import exceptions as redis_exceptions

from backoffice.db import ContentKind

logger = logging.getLogger(__name__)

CACHE_TAGS = {kind: kind.value for kind in ContentKind}


class TagCache(Protocol):
    def get(self, tag: str) -> Optional[Any]:
        ...

    def set(self, tag: str, payload: Any) -> None:
        ...

    def invalidate(self, *tags: str) -> None:
        ...


@dataclass
class InMemoryTagCache:
    entries: dict = field(default_factory=dict)
    invalidated: list = field(default_factory=list)

    def get(self, tag: str) -> Optional[Any]:
        return self.entries.get(tag)

    def set(self, tag: str, payload: Any) -> None:
        self.entries[tag] = payload

    def invalidate(self, *tags: str) -> None:
        for tag in tags:
            self.entries.pop(tag, None)
            self.invalidated.append(tag)


@dataclass
class RedisTagCache:
    """JSON payloads stored under ``{prefix}{tag}`` with a TTL."""

    url: str
    prefix: str = "cache:"
    ttl_seconds: int = 3600

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def _key(self, tag: str) -> str:
        return f"{self.prefix}{tag}"

    def get(self, tag: str) -> Optional[Any]:
        try:
            raw = self.client.get(self._key(tag))
        except redis_exceptions.RedisError:
            logger.warning("Cache read failed for tag %s", tag, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable cache entry for tag %s", tag)
            return None

    def set(self, tag: str, payload: Any) -> None:
        body = json.dumps(payload, default=str)
        try:
            self.client.set(self._key(tag), body, ex=self.ttl_seconds)
        except redis_exceptions.RedisError:
            logger.warning("Cache write failed for tag %s", tag, exc_info=True)

    def invalidate(self, *tags: str) -> None:
        if not tags:
            return
        try:
            self.client.delete(*[self._key(tag) for tag in tags])
        except redis_exceptions.RedisError:
            logger.warning("Cache invalidation failed for %s", tags, exc_info=True)
