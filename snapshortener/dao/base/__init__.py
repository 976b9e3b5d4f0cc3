from snapshortener.dao.base.snapshot_base_dao import SnapshotBaseDAO


__all__ = ['SnapshotBaseDAO']
