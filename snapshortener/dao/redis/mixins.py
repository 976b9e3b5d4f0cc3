"""Redis client plumbing for the snapshot DAO

`RedisClientMixin` gives a DAO the two things every slot operation needs: a
client (`self.redis`) and the slot key schema (`self.keys`). Snapshots are
plain JSON strings, so the client always decodes responses.

Example:
    >>> dao = SnapshotRedisDAO(redis_host='localhost', prefix='snapshortener:dev', healthcheck=False)
    >>> dao._healthcheck(raise_error=False)
    False
"""

import redis

from snapshortener.dao.exceptions import DataStoreError
from snapshortener.dao.redis.helpers import REDIS_CONNECTIVITY_ERRORS, redis_address
from snapshortener.dao.redis.redis_key_schema import RedisKeySchema


class RedisClientMixin:
    """Attach a Redis client and slot key schema to a snapshot DAO.

    Either pass a ready `redis_client`, or the `redis_*` connection settings
    (the shape of the `storage.redis` config section, prefixed with `redis_`).

    Args:
        prefix (str | None):
            Namespace for slot keys, usually `<app name>:<app env>`.
        healthcheck (bool):
            PING Redis right away and raise DataStoreError if it doesn't answer.
            Callers that tolerate a missing store pass False and check later.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
        healthcheck: bool = True,
    ):
        if redis_client is None:
            # Port and db may come from YAML or env vars as strings
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                decode_responses=True,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        if healthcheck:
            self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Return True if Redis answers PING

        Raises:
            DataStoreError: if Redis is unreachable and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except REDIS_CONNECTIVITY_ERRORS as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f'Redis at {redis_address(self.redis)} did not answer PING. Check the storage.redis configuration.'
            ) from e
        return True
