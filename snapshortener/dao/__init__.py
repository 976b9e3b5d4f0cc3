from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.file import SnapshotFileDAO
from snapshortener.dao.memory import SnapshotMemoryDAO
from snapshortener.dao.redis import SnapshotRedisDAO


__all__ = [
    'SnapshotBaseDAO',
    'SnapshotFileDAO',
    'SnapshotMemoryDAO',
    'SnapshotRedisDAO',
]
