"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection
        issues, timeouts, OOM, unwritable files, etc.).

Example:
    >>> from snapshortener.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    snapshortener.dao.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""

from snapshortener.exceptions import SnapShortenerError, StorageUnavailableError


class DAOError(SnapShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'storage:dao_error'


class DataStoreError(DAOError, StorageUnavailableError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, unwritable files, etc.
    """

    error_code = 'storage:data_store_error'
