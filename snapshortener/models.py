"""Data models for the short URL registry.

Classes:
    ClickEvent:
        One successful dereference of a short URL.
    ShortenedURL:
        One shortening request and its click history.
    LogEvent:
        One entry in the persisted event log.
    ValidationResult:
        Outcome of a validation check with every violated rule.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> now = datetime.now(UTC)
    >>> url = ShortenedURL(
    ...     id='url_1760000000000_k3j9x0a1b2c3',
    ...     original_url='https://example.com/article/123',
    ...     short_code='abc123',
    ...     created_at=now,
    ...     expires_at=now + timedelta(minutes=30),
    ... )
    >>> url.is_live(now)
    True
    >>> url.short_url('https://sho.rt')
    'https://sho.rt/abc123'
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any

from snapshortener.constants import LogLevel, Privacy


# fmt: off
@dataclass(frozen=True)
class ClickEvent:
    id: str                                       # Unique click identifier
    timestamp: datetime                           # Moment the redirect was served
    user_agent: str                               # Client user agent, as given
    referrer: str                                 # Client referrer, as given
    ip_address: str = Privacy.MASKED_IP           # Never the real address
    location: str = Privacy.CLICK_LOCATION        # Static, not geolocated
# fmt: on


@dataclass
class ShortenedURL:
    """Represent a shortened URL mapping and its click history.

    Only `is_active`, `click_count` and `clicks` change after creation:
    `is_active` flips to False once (expiry sweep) and never back, while
    clicks are only ever appended.

    Attributes:
        id (str):
            Opaque unique identifier, primary key.
        original_url (str):
            Destination the short code redirects to.
        short_code (str):
            Unique token, secondary key.
        created_at (datetime):
            Creation instant (UTC).
        expires_at (datetime):
            Deadline after which the short code no longer resolves.
        is_active (bool):
            False once the expiry sweep has deactivated the record.
        click_count (int):
            Number of recorded clicks.
        clicks (list[ClickEvent]):
            Click events in arrival order.
    """

    id: str
    original_url: str
    short_code: str
    created_at: datetime
    expires_at: datetime
    is_active: bool = True
    click_count: int = 0
    clicks: list[ClickEvent] = field(default_factory=list)

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        return self.expires_at < now

    def is_live(self, now: datetime | None = None) -> bool:
        """Return True if the record is active and its deadline hasn't passed."""
        return self.is_active and not self.is_expired(now)

    def short_url(self, base_url: str) -> str:
        return f'{base_url.rstrip("/")}/{self.short_code}'


# fmt: off
@dataclass(frozen=True)
class LogEvent:
    id: str                                       # Unique log event identifier
    timestamp: datetime                           # Moment the event was emitted
    level: LogLevel                               # INFO, WARN or ERROR
    action: str                                   # Free-form action tag, e.g. URL_SHORTENED
    details: dict[str, Any]                       # Event payload (incl. jurisdiction annotation)
    session_id: str                               # Constant for the process lifetime
    user_id: str | None = None                    # Unused; kept for snapshot compatibility
# fmt: on


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[str]) -> 'ValidationResult':
        return cls(is_valid=not errors, errors=tuple(errors))
