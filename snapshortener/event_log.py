"""Append-only application event log

Every notable registry action (a URL shortened, a click recorded, a storage
failure, ...) is recorded as a LogEvent. Events are kept in memory, appended
to the persisted `logs` snapshot slot and forwarded to the standard logging
module under the `snapshortener.events` logger.

The persisted history is a ring buffer: after every write only the most recent
`capacity` events (1000 by default) are kept, oldest dropped first.

Classes:
    EventLog:
        Session-scoped event recorder with INFO/WARN/ERROR entry points.

Example:
    >>> from snapshortener.dao import SnapshotMemoryDAO
    >>> event_log = EventLog(dao=SnapshotMemoryDAO())
    >>> event = event_log.info('URL_SHORTENED', {'shortCode': 'abc123'})
    >>> event.details['jurisdiction']
    'Hyderabad/Secunderabad, India'
    >>> len(event_log.stored())
    1
"""

import logging
import threading
from collections import deque
from datetime import datetime, UTC
from typing import Any

from snapshortener.constants import Limits, LogLevel, Privacy, StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.exceptions import DAOError
from snapshortener.exceptions import MalformedSnapshotError
from snapshortener.models import LogEvent
from snapshortener.serialization import decode_logs, encode_logs
from snapshortener.utils.shortener import generate_id


logger = logging.getLogger(__name__)
events_logger = logging.getLogger('snapshortener.events')

LOGGING_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class EventLog:
    """Record LogEvents in memory and in the persisted ring buffer.

    Attributes:
        dao (SnapshotBaseDAO | None):
            Durable storage for the `logs` slot. None keeps events in memory only.
        capacity (int):
            Maximum number of events kept, both in memory and persisted.
        session_id (str):
            Identifier stamped on every event, constant for this instance.
    """

    def __init__(self, dao: SnapshotBaseDAO | None = None, capacity: int = Limits.LOG_CAPACITY, session_id: str | None = None):
        if capacity < 1:
            raise ValueError(f'Capacity must be a positive integer (given value: {capacity}).')

        self.dao = dao
        self.capacity = capacity
        self.session_id = session_id or generate_id('session')
        self._events: deque[LogEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def info(self, action: str, details: dict[str, Any] | None = None) -> LogEvent:
        return self._emit(LogLevel.INFO, action, details)

    def warn(self, action: str, details: dict[str, Any] | None = None) -> LogEvent:
        return self._emit(LogLevel.WARN, action, details)

    def error(self, action: str, details: dict[str, Any] | None = None) -> LogEvent:
        return self._emit(LogLevel.ERROR, action, details)

    @property
    def events(self) -> list[LogEvent]:
        """Return a copy of the events recorded by this instance, oldest first"""
        with self._lock:
            return list(self._events)

    def stored(self) -> list[LogEvent]:
        """Reload the persisted event history, oldest first

        Returns an empty list if no storage is attached or it can't be read.
        """
        if self.dao is None:
            return []
        try:
            payload = self.dao.get(StorageSlot.LOGS)
            return decode_logs(payload) if payload else []
        except (DAOError, MalformedSnapshotError):
            logger.warning('Failed to load persisted event log.', exc_info=True, extra={'sessionId': self.session_id})
            return []

    def _emit(self, level: LogLevel, action: str, details: dict[str, Any] | None) -> LogEvent:
        event = LogEvent(
            id=generate_id('log'),
            timestamp=datetime.now(UTC),
            level=level,
            action=action,
            details={
                **(details or {}),
                'jurisdiction': Privacy.JURISDICTION,
                'compliance': Privacy.COMPLIANCE,
            },
            session_id=self.session_id,
        )

        with self._lock:
            self._events.append(event)
            self._persist(event)

        events_logger.log(
            LOGGING_LEVELS[level],
            action,
            extra={'action': action, 'details': event.details, 'sessionId': self.session_id, 'eventId': event.id},
        )
        return event

    def _persist(self, event: LogEvent) -> None:
        if self.dao is None:
            return

        # Other sessions may share the slot, so append to what is stored
        # rather than to this instance's in-memory list.
        try:
            payload = self.dao.get(StorageSlot.LOGS)
            history = decode_logs(payload) if payload else []
        except MalformedSnapshotError:
            logger.warning('Persisted event log is malformed. Starting a new history.', exc_info=True)
            history = []
        except DAOError:
            logger.warning('Failed to read persisted event log.', exc_info=True, extra={'action': event.action})
            return

        history.append(event)
        try:
            self.dao.put(StorageSlot.LOGS, encode_logs(history[-self.capacity :]))
        except DAOError:
            logger.warning('Failed to persist event log.', exc_info=True, extra={'action': event.action})
