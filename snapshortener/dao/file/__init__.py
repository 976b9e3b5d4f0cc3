from snapshortener.dao.file.snapshot_file_dao import SnapshotFileDAO


__all__ = ['SnapshotFileDAO']
