"""Abstract base class for snapshot data access objects (DAOs).

This class establishes a consistent contract for all snapshot DAO
implementations, regardless of the underlying storage mechanism (e.g. Redis,
files on disk, process memory).

A snapshot DAO exposes two independent, string-keyed slots (see
`StorageSlot`): one for the serialized list of short URL records and one for
the serialized event log. Slots are always read and written whole.

Responsibilities:
    - Provide an interface for reading and replacing slot payloads.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from snapshortener.constants import StorageSlot
        >>> from snapshortener.dao import SnapshotMemoryDAO

        >>> dao = SnapshotMemoryDAO(prefix='snapshortener:test')
        >>> dao.put(StorageSlot.URLS, '[]')
        <SnapshotMemoryDAO>
        >>> dao.get(StorageSlot.URLS)
        '[]'
        >>> dao.get(StorageSlot.LOGS) is None
        True
"""

from abc import ABC, abstractmethod

from snapshortener.constants import StorageSlot


class SnapshotBaseDAO(ABC):
    """Interface for snapshot data access objects (DAOs).

    Methods:
        get(slot: StorageSlot, **kwargs) -> str | None:
            Retrieve the payload stored in a slot.
            Returns None if the slot has never been written.
            Raises DataStoreError on connection or read failure.

        put(slot: StorageSlot, payload: str, **kwargs) -> SnapshotBaseDAO:
            Replace the payload stored in a slot.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., SnapshotRedisDAO or
        SnapshotFileDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Every write replaces the whole slot. Concurrent writers must be
          serialized by the caller; otherwise the last writer wins.
    """

    @abstractmethod
    def get(self, slot: StorageSlot, **kwargs) -> str | None:
        """Retrieve the payload stored in a slot.

        Args:
            slot (StorageSlot):
                The slot to read.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The stored payload, or None if the slot is empty.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put(self, slot: StorageSlot, payload: str, **kwargs) -> 'SnapshotBaseDAO':
        """Replace the payload stored in a slot.

        Args:
            slot (StorageSlot):
                The slot to overwrite.

            payload (str):
                The full serialized snapshot.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            SnapshotBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
