"""Shared helpers for the Redis snapshot DAO

Functions:
    redis_address(client) -> str
        Render a client's connection target as "<host>:<port>/<db>".

    handle_redis_connection_error(method) -> method
        Decorator: re-raise redis connectivity failures as DataStoreError so
        the registry and event log only ever deal with storage-agnostic errors.
"""

import functools
from typing import Any, TypeVar
from collections.abc import Callable

import redis

from snapshortener.dao.exceptions import DataStoreError


__all__ = ['redis_address', 'handle_redis_connection_error']

F = TypeVar('F', bound=Callable[..., Any])

REDIS_CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_address(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error(method: F) -> F:
    """Turn a slot read/write that can't reach Redis into a DataStoreError

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, slot):
        ...     return self.redis.get(self.keys.snapshot_key(slot))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e

    return wrapper
