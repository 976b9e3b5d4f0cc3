"""JSON codec for persisted snapshots.

Snapshots are JSON lists with snake_case keys. Datetimes are written with
`datetime.isoformat()` (microsecond precision, explicit UTC offset) so they
read back to the exact same instant.

Functions:
    encode_urls(urls) -> str
    decode_urls(payload) -> list[ShortenedURL]
    encode_logs(events) -> str
    decode_logs(payload) -> list[LogEvent]

Raises:
    MalformedSnapshotError:
        When a payload is not valid JSON or a record lacks required fields.
"""

import json
from datetime import datetime, UTC
from typing import Any
from collections.abc import Iterable

from snapshortener.constants import LogLevel, Privacy
from snapshortener.exceptions import MalformedSnapshotError
from snapshortener.models import ClickEvent, LogEvent, ShortenedURL


def _dump_datetime(value: datetime) -> str:
    return value.isoformat()


def _load_datetime(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    # Naive timestamps are treated as UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def _load_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f'expected a boolean (given type: {type(value).__name__})')
    return value


def serialize_click(click: ClickEvent) -> dict[str, Any]:
    return {
        'id': click.id,
        'timestamp': _dump_datetime(click.timestamp),
        'user_agent': click.user_agent,
        'referrer': click.referrer,
        'ip_address': click.ip_address,
        'location': click.location,
    }


def deserialize_click(data: dict[str, Any]) -> ClickEvent:
    return ClickEvent(
        id=data['id'],
        timestamp=_load_datetime(data['timestamp']),
        user_agent=data.get('user_agent', ''),
        referrer=data.get('referrer', ''),
        ip_address=data.get('ip_address', Privacy.MASKED_IP),
        location=data.get('location', Privacy.CLICK_LOCATION),
    )


def serialize_url(url: ShortenedURL) -> dict[str, Any]:
    return {
        'id': url.id,
        'original_url': url.original_url,
        'short_code': url.short_code,
        'created_at': _dump_datetime(url.created_at),
        'expires_at': _dump_datetime(url.expires_at),
        'is_active': url.is_active,
        'click_count': url.click_count,
        'clicks': [serialize_click(click) for click in url.clicks],
    }


def deserialize_url(data: dict[str, Any]) -> ShortenedURL:
    return ShortenedURL(
        id=data['id'],
        original_url=data['original_url'],
        short_code=data['short_code'],
        created_at=_load_datetime(data['created_at']),
        expires_at=_load_datetime(data['expires_at']),
        is_active=_load_bool(data.get('is_active', True)),
        click_count=int(data.get('click_count', 0)),
        clicks=[deserialize_click(click) for click in data.get('clicks', [])],
    )


def serialize_log(event: LogEvent) -> dict[str, Any]:
    return {
        'id': event.id,
        'timestamp': _dump_datetime(event.timestamp),
        'level': event.level.value,
        'action': event.action,
        'details': event.details,
        'session_id': event.session_id,
        'user_id': event.user_id,
    }


def deserialize_log(data: dict[str, Any]) -> LogEvent:
    return LogEvent(
        id=data['id'],
        timestamp=_load_datetime(data['timestamp']),
        level=LogLevel(data['level']),
        action=data['action'],
        details=dict(data.get('details') or {}),
        session_id=data['session_id'],
        user_id=data.get('user_id'),
    )


def _decode_list(payload: str, what: str) -> list[dict[str, Any]]:
    try:
        items = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError(f'{what} snapshot is not valid JSON.') from e
    if not isinstance(items, list):
        raise MalformedSnapshotError(f'{what} snapshot must be a JSON list (given type: {type(items).__name__}).')
    return items


def encode_urls(urls: Iterable[ShortenedURL]) -> str:
    return json.dumps([serialize_url(url) for url in urls])


def decode_urls(payload: str) -> list[ShortenedURL]:
    try:
        return [deserialize_url(item) for item in _decode_list(payload, 'URL')]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedSnapshotError(f'URL snapshot contains a malformed record ({e}).') from e


def encode_logs(events: Iterable[LogEvent]) -> str:
    # Log details are free-form and may carry datetimes
    return json.dumps([serialize_log(event) for event in events], default=str)


def decode_logs(payload: str) -> list[LogEvent]:
    try:
        return [deserialize_log(item) for item in _decode_list(payload, 'Log')]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedSnapshotError(f'Log snapshot contains a malformed event ({e}).') from e
