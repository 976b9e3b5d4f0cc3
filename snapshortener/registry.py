"""In-memory registry of shortened URLs mirrored into durable storage

The registry keeps two indexes, id -> record and short code -> id, and routes
every mutation through `_index()` / `_unindex()` so both always agree. After
each mutation the whole registry is written to the `urls` snapshot slot.

Responsibilities:
    - Generate record ids and short codes;
    - Enforce short code uniqueness and the active URL cap;
    - Enforce expiry lazily on lookup and eagerly through `sweep()`;
    - Record click events;
    - Load and persist full snapshots, logging (not raising) storage failures.

Concurrency:
    All public methods take one re-entrant lock, covering both indexes, the
    active cap check and the snapshot write. The background sweeper and
    foreground callers therefore never interleave mid-operation.

Classes:
    URLRegistry:
        The registry itself.

Example:
    >>> from snapshortener.dao import SnapshotMemoryDAO
    >>> registry = URLRegistry(dao=SnapshotMemoryDAO())
    >>> url = registry.shorten('https://example.com/a', ttl_minutes=1)
    >>> len(url.short_code)
    6
    >>> registry.record_click(url.short_code, 'curl/8.0', '')
    True
    >>> registry.lookup_by_short_code(url.short_code).click_count
    1
"""

import copy
import logging
import threading
from datetime import datetime, timedelta, UTC

from beartype import beartype

from snapshortener.constants import Defaults, Limits, StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.exceptions import DAOError
from snapshortener.event_log import EventLog
from snapshortener.exceptions import ConcurrencyLimitExceededError, DuplicateShortCodeError, MalformedSnapshotError
from snapshortener.models import ClickEvent, ShortenedURL
from snapshortener.serialization import decode_urls, encode_urls
from snapshortener.utils.shortener import generate_id, generate_shortcode


logger = logging.getLogger(__name__)


class URLRegistry:
    """Registry of shortened URLs keyed by id and by short code.

    Attributes:
        dao (SnapshotBaseDAO):
            Durable storage for the `urls` slot.
        event_log (EventLog):
            Recorder for registry events.
        max_active (int):
            Maximum number of simultaneously active records.
        code_length (int):
            Length of generated short codes.

    Methods:
        shorten(original_url, custom_code=None, ttl_minutes=30) -> ShortenedURL
        lookup_by_short_code(short_code) -> ShortenedURL | None
        find_by_short_code(short_code) -> ShortenedURL | None
        record_click(short_code, user_agent, referrer) -> bool
        list_all() -> list[ShortenedURL]
        delete(url_id) -> bool
        sweep() -> int
        active_count() -> int
        load() -> int
        persist() -> bool
    """

    def __init__(
        self,
        dao: SnapshotBaseDAO,
        event_log: EventLog | None = None,
        max_active: int = Limits.MAX_ACTIVE_URLS,
        code_length: int = Defaults.SHORTCODE_LENGTH,
    ):
        self.dao = dao
        self.event_log = event_log if event_log is not None else EventLog(dao=dao)
        self.max_active = max_active
        self.code_length = code_length

        self._urls: dict[str, ShortenedURL] = {}
        self._short_codes: dict[str, str] = {}
        self._lock = threading.RLock()

        self.load()

    # -------------------------------
    # Index choke points
    # -------------------------------

    def _index(self, url: ShortenedURL) -> None:
        self._urls[url.id] = url
        self._short_codes[url.short_code] = url.id

    def _unindex(self, url: ShortenedURL) -> None:
        del self._urls[url.id]
        del self._short_codes[url.short_code]

    def _get(self, short_code: str) -> ShortenedURL | None:
        url_id = self._short_codes.get(short_code)
        return self._urls.get(url_id) if url_id is not None else None

    # -------------------------------
    # Persistence
    # -------------------------------

    def load(self) -> int:
        """Replace in-memory state with the persisted snapshot

        Returns:
            int: number of records loaded (0 if storage is empty or unreadable).
        """
        with self._lock:
            try:
                payload = self.dao.get(StorageSlot.URLS)
                urls = decode_urls(payload) if payload else []
            except (DAOError, MalformedSnapshotError) as e:
                logger.warning('Failed to load URL snapshot. Starting empty.', exc_info=True)
                self.event_log.error('STORAGE_LOAD_ERROR', {'error': str(e)})
                return 0

            self._urls.clear()
            self._short_codes.clear()
            for url in urls:
                self._index(url)

            if urls:
                self.event_log.info('URLS_LOADED_FROM_STORAGE', {'count': len(urls)})
            return len(urls)

    def persist(self) -> bool:
        """Write the full registry snapshot

        Storage failures are logged and swallowed: in-memory state stays the
        source of truth for the rest of the process lifetime.

        Returns:
            bool: True if the snapshot was written, False otherwise.
        """
        with self._lock:
            try:
                self.dao.put(StorageSlot.URLS, encode_urls(self._urls.values()))
            except DAOError as e:
                logger.warning('Failed to persist URL snapshot.', exc_info=True)
                self.event_log.error('STORAGE_SAVE_ERROR', {'error': str(e)})
                return False
            logger.debug('Persisted URL snapshot.', extra={'count': len(self._urls)})
            return True

    # -------------------------------
    # Registry operations
    # -------------------------------

    @beartype
    def shorten(self, original_url: str, custom_code: str | None = None, ttl_minutes: int = Defaults.TTL_MINUTES) -> ShortenedURL:
        """Create a short URL record

        Args:
            original_url (str):
                Destination URL. Assumed already validated by the caller.
            custom_code (str | None):
                Short code to use verbatim. Empty or None generates one.
            ttl_minutes (int):
                Minutes until the record expires. Defaults to 30.

        Returns:
            ShortenedURL: a copy of the new record.

        Raises:
            DuplicateShortCodeError:
                If the short code already maps to a record. Generated codes are
                retried a few times before giving up; custom codes are not.
            ConcurrencyLimitExceededError:
                If `max_active` records are already active.
        """
        with self._lock:
            url_id = generate_id('url')
            short_code = custom_code or self._generate_unique_code()

            if short_code in self._short_codes:
                self.event_log.warn('DUPLICATE_SHORT_CODE', {'shortCode': short_code})
                raise DuplicateShortCodeError(f"Short code '{short_code}' already exists.")

            # Deactivate expired records first so they don't count against the cap
            self.sweep()
            active = self.active_count()
            if active >= self.max_active:
                self.event_log.warn('CONCURRENT_LIMIT_REACHED', {'activeCount': active})
                raise ConcurrencyLimitExceededError(f'Maximum of {self.max_active} concurrent URLs allowed.')

            now = datetime.now(UTC)
            url = ShortenedURL(
                id=url_id,
                original_url=original_url,
                short_code=short_code,
                created_at=now,
                expires_at=now + timedelta(minutes=ttl_minutes),
            )

            self._index(url)
            self.persist()

            self.event_log.info(
                'URL_SHORTENED',
                {
                    'id': url_id,
                    'shortCode': short_code,
                    'originalUrl': original_url[:100],
                    'expiryMinutes': ttl_minutes,
                },
            )
            return copy.deepcopy(url)

    def _generate_unique_code(self) -> str:
        for _ in range(Limits.GENERATED_SHORTCODE_ATTEMPTS):
            short_code = generate_shortcode(self.code_length)
            if short_code not in self._short_codes:
                return short_code
        # Hand the collision to the duplicate check in shorten()
        return short_code

    @beartype
    def lookup_by_short_code(self, short_code: str) -> ShortenedURL | None:
        """Return a copy of the live record for a short code

        Returns None if the short code is unknown, its record was deactivated,
        or its deadline has passed (even if the sweep hasn't run yet).
        """
        with self._lock:
            url = self._get(short_code)
            if url is None or not url.is_live():
                return None
            return copy.deepcopy(url)

    @beartype
    def find_by_short_code(self, short_code: str) -> ShortenedURL | None:
        """Return a copy of the record for a short code, live or not"""
        with self._lock:
            url = self._get(short_code)
            return copy.deepcopy(url) if url is not None else None

    @beartype
    def record_click(self, short_code: str, user_agent: str, referrer: str) -> bool:
        """Append a click event to a live record

        Returns:
            bool: True if the click was recorded, False if the short code
                  is unknown, inactive or expired.
        """
        with self._lock:
            url = self._get(short_code)
            if url is None or not url.is_live():
                self.event_log.warn('CLICK_REJECTED', {'shortCode': short_code})
                return False

            click = ClickEvent(
                id=generate_id('click'),
                timestamp=datetime.now(UTC),
                user_agent=user_agent,
                referrer=referrer,
            )
            url.clicks.append(click)
            url.click_count += 1
            self.persist()

            self.event_log.info(
                'CLICK_RECORDED',
                {'shortCode': short_code, 'clickId': click.id, 'totalClicks': url.click_count},
            )
            return True

    def list_all(self) -> list[ShortenedURL]:
        """Return copies of every record, newest first"""
        with self._lock:
            urls = sorted(self._urls.values(), key=lambda url: url.created_at, reverse=True)
            return copy.deepcopy(urls)

    @beartype
    def delete(self, url_id: str) -> bool:
        """Remove a record and free its short code

        Returns:
            bool: True if the record existed, False otherwise.
        """
        with self._lock:
            url = self._urls.get(url_id)
            if url is None:
                return False

            self._unindex(url)
            self.persist()

            self.event_log.info('URL_DELETED', {'id': url_id, 'shortCode': url.short_code})
            return True

    def active_count(self) -> int:
        with self._lock:
            return sum(1 for url in self._urls.values() if url.is_active)

    def _deactivate_expired(self) -> int:
        now = datetime.now(UTC)
        expired = [url for url in self._urls.values() if url.is_active and url.is_expired(now)]
        for url in expired:
            url.is_active = False
        return len(expired)

    def sweep(self) -> int:
        """Deactivate every active record whose deadline has passed

        Records are never removed here; they stay visible through `list_all()`.

        Returns:
            int: number of records deactivated.
        """
        with self._lock:
            cleaned = self._deactivate_expired()
            if cleaned > 0:
                self.persist()
                self.event_log.info('EXPIRED_URLS_CLEANED', {'count': cleaned})
            return cleaned
