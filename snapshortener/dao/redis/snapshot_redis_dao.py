"""Data Access Object (DAO) implementation for storing snapshots in Redis

This module provides a Redis-based implementation of SnapshotBaseDAO. Each
storage slot maps to one Redis string key, namespaced by the DAO prefix:

    <prefix>:snapshots:urls   -> JSON list of short URL records
    <prefix>:snapshots:logs   -> JSON list of log events

Classes:
    SnapshotRedisDAO:
        DAO for reading and replacing snapshot slots in a Redis datastore.

Example:
    >>> from snapshortener.constants import StorageSlot
    >>> from snapshortener.dao.redis import SnapshotRedisDAO

    >>> dao = SnapshotRedisDAO(prefix="snapshortener:dev")
    >>> dao.put(StorageSlot.URLS, '[]')
    <SnapshotRedisDAO>
    >>> dao.get(StorageSlot.URLS)
    '[]'
"""

from beartype import beartype

from snapshortener.constants import StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.redis.mixins import RedisClientMixin
from snapshortener.dao.redis.helpers import handle_redis_connection_error


class SnapshotRedisDAO(RedisClientMixin, SnapshotBaseDAO):
    """Redis-based Data Access Object (DAO) for snapshot slots

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(slot: StorageSlot, **kwargs) -> str | None:
            Retrieve a slot payload. None if the key doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        put(slot: StorageSlot, payload: str, **kwargs) -> SnapshotRedisDAO:
            Replace a slot payload (no TTL: snapshots persist until overwritten).
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def get(self, slot: StorageSlot, **kwargs) -> str | None:
        payload = self.redis.get(self.keys.snapshot_key(slot))
        if isinstance(payload, bytes):
            payload = payload.decode('utf-8')
        return payload

    @handle_redis_connection_error
    @beartype
    def put(self, slot: StorageSlot, payload: str, **kwargs) -> 'SnapshotRedisDAO':
        self.redis.set(self.keys.snapshot_key(slot), payload)
        return self
