"""Data Access Object (DAO) implementation for storing snapshots as files

Each storage slot maps to one JSON file inside a directory. When a prefix is
given, colons are replaced so the prefix is safe to use in file names:

    <directory>/<prefix>.urls.json
    <directory>/<prefix>.logs.json

Writes go to a temporary sibling file first and are moved into place with
`os.replace()`, so a crash mid-write never leaves a truncated snapshot.

Example:
    >>> from snapshortener.dao.file import SnapshotFileDAO
    >>> dao = SnapshotFileDAO(directory='.snapshortener', prefix='snapshortener:local')
    >>> dao.put(StorageSlot.URLS, '[]').get(StorageSlot.URLS)
    '[]'
"""

import os
from pathlib import Path

from beartype import beartype

from snapshortener.constants import StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.exceptions import DataStoreError


class SnapshotFileDAO(SnapshotBaseDAO):
    def __init__(self, directory: str | os.PathLike = '.snapshortener', prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.directory = Path(directory)
        self.prefix = prefix

    def path(self, slot: StorageSlot) -> Path:
        name = StorageSlot(slot).value
        if self.prefix:
            name = f'{self.prefix.replace(":", ".")}.{name}'
        return self.directory / f'{name}.json'

    @beartype
    def get(self, slot: StorageSlot, **kwargs) -> str | None:
        path = self.path(slot)
        try:
            return path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except OSError as e:
            raise DataStoreError(f"Can't read snapshot file {path}.") from e

    @beartype
    def put(self, slot: StorageSlot, payload: str, **kwargs) -> 'SnapshotFileDAO':
        path = self.path(slot)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding='utf-8')
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.is_file():
                tmp_path.unlink()
            raise DataStoreError(f"Can't write snapshot file {path}.") from e
        return self
