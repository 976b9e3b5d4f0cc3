"""In-process snapshot DAO

Keeps slot payloads in a plain dictionary. Nothing survives the process, which
makes this backend suitable for tests and throwaway local sessions only.
"""

from beartype import beartype

from snapshortener.constants import StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO


class SnapshotMemoryDAO(SnapshotBaseDAO):
    def __init__(self, prefix: str | None = None):
        self.prefix = prefix
        self.slots: dict[StorageSlot, str] = {}

    @beartype
    def get(self, slot: StorageSlot, **kwargs) -> str | None:
        return self.slots.get(StorageSlot(slot))

    @beartype
    def put(self, slot: StorageSlot, payload: str, **kwargs) -> 'SnapshotMemoryDAO':
        self.slots[StorageSlot(slot)] = payload
        return self
