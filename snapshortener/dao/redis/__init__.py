from snapshortener.dao.redis.redis_key_schema import RedisKeySchema
from snapshortener.dao.redis.snapshot_redis_dao import SnapshotRedisDAO
from snapshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'SnapshotRedisDAO',
    'RedisClientMixin',
]
