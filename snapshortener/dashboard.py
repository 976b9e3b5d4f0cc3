"""Statistics dashboard aggregation

Functions:
    summarize(urls, logs, now=None) -> DashboardSummary
        Aggregate registry records and persisted log events into the numbers
        shown on the statistics dashboard.

Example:
    >>> summary = summarize(registry.list_all(), event_log.stored())
    >>> summary.total_urls, summary.active_urls, summary.total_clicks
    (3, 2, 17)
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any
from collections.abc import Iterable

from snapshortener.models import LogEvent, ShortenedURL
from snapshortener.serialization import serialize_log, serialize_url


TOP_URLS_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 10
ACTIVITY_MARKERS = ('CLICK', 'URL')


@dataclass(frozen=True)
class DashboardSummary:
    total_urls: int
    active_urls: int
    total_clicks: int
    top_urls: list[ShortenedURL] = field(default_factory=list)
    recent_activity: list[LogEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'total_urls': self.total_urls,
            'active_urls': self.active_urls,
            'total_clicks': self.total_clicks,
            'top_urls': [serialize_url(url) for url in self.top_urls],
            'recent_activity': [serialize_log(event) for event in self.recent_activity],
        }


def top_urls(urls: Iterable[ShortenedURL], limit: int = TOP_URLS_LIMIT) -> list[ShortenedURL]:
    # sorted() is stable: ties keep their incoming (newest first) order
    return sorted(urls, key=lambda url: url.click_count, reverse=True)[:limit]


def recent_activity(logs: Iterable[LogEvent], limit: int = RECENT_ACTIVITY_LIMIT) -> list[LogEvent]:
    relevant = [event for event in logs if any(marker in event.action for marker in ACTIVITY_MARKERS)]
    return sorted(relevant, key=lambda event: event.timestamp, reverse=True)[:limit]


def summarize(urls: Iterable[ShortenedURL], logs: Iterable[LogEvent], now: datetime | None = None) -> DashboardSummary:
    now = now or datetime.now(UTC)
    urls = list(urls)

    return DashboardSummary(
        total_urls=len(urls),
        active_urls=sum(1 for url in urls if url.is_live(now)),
        total_clicks=sum(url.click_count for url in urls),
        top_urls=top_urls(urls),
        recent_activity=recent_activity(logs),
    )
