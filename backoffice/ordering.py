"""
Custom display order overlay for list-type content.

The relational store owns the canonical list of each content kind, newest
first. A separate key-value store may hold an administrator-defined order
record (a list of ids) per kind. The two stores are updated independently,
so an order record can reference deleted entities or miss new ones; `merge`
treats both as ordinary data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Protocol, Sequence, TypeVar

import redis
from redis import exceptions as redis_exceptions

from backoffice.db import ContentKind

T = TypeVar("T")
EntityId = Any

ORDER_NAMESPACES: Dict[ContentKind, str] = {
    ContentKind.GALLERY_IMAGES: "gallery:images:order",
    ContentKind.GALLERY_VIDEOS: "gallery:videos:order",
    ContentKind.TEAM: "team:order",
    ContentKind.TESTIMONIALS: "testimonials:order",
}


class OrderStoreError(RuntimeError):
    """Raised when the order-record store cannot be reached."""


class OrderStore(Protocol):
    """Minimal interface over the persisted order records."""

    def get_order(self, namespace: str) -> list[str]:
        ...

    def remove_from_order(self, namespace: str, entity_id: EntityId) -> None:
        ...

    def append_to_order(self, namespace: str, entity_id: EntityId) -> None:
        ...

    def replace_order(self, namespace: str, ids: Sequence[EntityId]) -> None:
        ...


def _normalize_id(value: EntityId) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _entity_id(entity: Any) -> EntityId:
    if isinstance(entity, Mapping):
        return entity["id"]
    return entity.id


def merge(
    canonical: Sequence[T], custom_order: Optional[Iterable[EntityId]]
) -> list[T]:
    """Overlay a custom id order on a canonical entity list.

    Entities named by ``custom_order`` come first, in that order. Ids that
    match nothing in ``canonical`` are dropped. Every remaining entity
    follows in its canonical position. The result is always a permutation
    of ``canonical``.

    Ids are compared by their string form, so ``7`` and ``"7"`` (as read
    back from Redis) name the same entity. ``canonical`` must not contain
    duplicate ids.
    """
    order = [_normalize_id(i) for i in custom_order or ()]
    if not order:
        return list(canonical)

    by_id = {_normalize_id(_entity_id(entity)): entity for entity in canonical}
    consumed: set[str] = set()
    merged: list[T] = []
    for entity_id in order:
        entity = by_id.get(entity_id)
        if entity is None or entity_id in consumed:
            continue
        consumed.add(entity_id)
        merged.append(entity)

    merged.extend(
        entity
        for entity in canonical
        if _normalize_id(_entity_id(entity)) not in consumed
    )
    return merged


def remove_id(store: OrderStore, namespace: str, entity_id: EntityId) -> None:
    """Drop the first occurrence of ``entity_id`` from the order record."""
    store.remove_from_order(namespace, _normalize_id(entity_id))


def append_id(store: OrderStore, namespace: str, entity_id: EntityId) -> None:
    """Append ``entity_id`` to the order record unless it is already there."""
    entity_id = _normalize_id(entity_id)
    if entity_id in store.get_order(namespace):
        return
    store.append_to_order(namespace, entity_id)


def replace_order(
    store: OrderStore, namespace: str, ids: Iterable[EntityId]
) -> list[str]:
    """Overwrite the order record; an empty list restores creation order."""
    normalized = list(dict.fromkeys(_normalize_id(i) for i in ids))
    store.replace_order(namespace, normalized)
    return normalized


def namespace_for(
    kind: ContentKind, ordered_kinds: Iterable[str]
) -> Optional[str]:
    """Return the order namespace for ``kind`` if the overlay applies to it."""
    kind = ContentKind(kind)
    if kind.value not in set(ordered_kinds):
        return None
    return ORDER_NAMESPACES.get(kind)


@dataclass
class InMemoryOrderStore:
    """Dict-of-lists order store for tests and local runs."""

    orders: Dict[str, list[str]] = field(default_factory=dict)

    def get_order(self, namespace: str) -> list[str]:
        return list(self.orders.get(namespace, []))

    def remove_from_order(self, namespace: str, entity_id: EntityId) -> None:
        items = self.orders.get(namespace)
        entity_id = _normalize_id(entity_id)
        if items and entity_id in items:
            items.remove(entity_id)

    def append_to_order(self, namespace: str, entity_id: EntityId) -> None:
        self.orders.setdefault(namespace, []).append(_normalize_id(entity_id))

    def replace_order(self, namespace: str, ids: Sequence[EntityId]) -> None:
        if ids:
            self.orders[namespace] = [_normalize_id(i) for i in ids]
        else:
            self.orders.pop(namespace, None)


@dataclass
class RedisOrderStore:
    """Redis-backed order records stored as lists, one key per namespace."""

    url: str

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def get_order(self, namespace: str) -> list[str]:
        try:
            items = self.client.lrange(namespace, 0, -1)
        except redis_exceptions.RedisError as exc:
            raise OrderStoreError(f"Could not read order {namespace}") from exc
        return [_normalize_id(item) for item in items]

    def remove_from_order(self, namespace: str, entity_id: EntityId) -> None:
        try:
            self.client.lrem(namespace, 1, _normalize_id(entity_id))
        except redis_exceptions.RedisError as exc:
            raise OrderStoreError(f"Could not update order {namespace}") from exc

    def append_to_order(self, namespace: str, entity_id: EntityId) -> None:
        try:
            self.client.rpush(namespace, _normalize_id(entity_id))
        except redis_exceptions.RedisError as exc:
            raise OrderStoreError(f"Could not update order {namespace}") from exc

    def replace_order(self, namespace: str, ids: Sequence[EntityId]) -> None:
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.delete(namespace)
            if ids:
                pipe.rpush(namespace, *[_normalize_id(i) for i in ids])
            pipe.execute()
        except redis_exceptions.RedisError as exc:
            raise OrderStoreError(f"Could not replace order {namespace}") from exc
