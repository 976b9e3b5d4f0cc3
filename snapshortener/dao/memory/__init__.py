from snapshortener.dao.memory.snapshot_memory_dao import SnapshotMemoryDAO


__all__ = ['SnapshotMemoryDAO']
