"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from fastapi import Depends

from backoffice.cache import InMemoryTagCache, RedisTagCache, TagCache
from backoffice.config import Settings, get_settings
from backoffice.content import ContentService
from backoffice.db import ContentStore, InMemoryContentStore, SqlContentStore
from backoffice.ordering import InMemoryOrderStore, OrderStore, RedisOrderStore
from backoffice.storage import InMemoryStorageClient, S3StorageClient, StorageClient

_content_store: ContentStore | None = None
_storage_client: StorageClient | None = None
_order_store: OrderStore | None = None
_tag_cache: TagCache | None = None


def get_content_store() -> ContentStore:
    """
    Return a singleton content store so in-memory state persists across requests.
    """
    global _content_store
    if _content_store:
        return _content_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _content_store = InMemoryContentStore()
    else:
        _content_store = SqlContentStore(settings.database_url)
    return _content_store


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.s3_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region or "",
            endpoint=settings.s3_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.storage_public_base_url or "",
        )
    return _storage_client


def get_order_store() -> OrderStore:
    """
    Return a singleton order-record store (Redis when configured).
    """
    global _order_store
    if _order_store:
        return _order_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.redis_url:
        _order_store = InMemoryOrderStore()
    else:
        _order_store = RedisOrderStore(url=settings.redis_url)
    return _order_store


def get_tag_cache() -> TagCache:
    global _tag_cache
    if _tag_cache:
        return _tag_cache

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.redis_url:
        _tag_cache = InMemoryTagCache()
    else:
        _tag_cache = RedisTagCache(
            url=settings.redis_url,
            prefix=settings.cache_prefix,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    return _tag_cache


def get_content_service(
    store: ContentStore = Depends(get_content_store),
    storage: StorageClient = Depends(get_storage_client),
    orders: OrderStore = Depends(get_order_store),
    cache: TagCache = Depends(get_tag_cache),
    settings: Settings = Depends(get_settings),
) -> ContentService:
    return ContentService(
        store=store,
        storage=storage,
        orders=orders,
        cache=cache,
        ordered_kinds=tuple(settings.ordered_kinds),
    )


def reset_backends() -> None:
    """Drop the cached clients (used by tests and the CLI)."""
    global _content_store, _storage_client, _order_store, _tag_cache
    _content_store = None
    _storage_client = None
    _order_store = None
    _tag_cache = None
