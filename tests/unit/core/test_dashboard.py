"""Unit tests for the statistics dashboard aggregation."""

from datetime import datetime, timedelta, UTC

from snapshortener.constants import LogLevel
from snapshortener.dashboard import recent_activity, summarize, top_urls
from snapshortener.models import LogEvent, ShortenedURL


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def make_url(n: int, clicks: int = 0, minutes: int = 30, active: bool = True) -> ShortenedURL:
    return ShortenedURL(
        id=f'url_{n}',
        original_url=f'https://example.com/{n}',
        short_code=f'code{n}',
        created_at=NOW - timedelta(minutes=n),
        expires_at=NOW + timedelta(minutes=minutes),
        is_active=active,
        click_count=clicks,
    )


def make_event(n: int, action: str) -> LogEvent:
    return LogEvent(
        id=f'log_{n}',
        timestamp=NOW + timedelta(seconds=n),
        level=LogLevel.INFO,
        action=action,
        details={},
        session_id='session_1',
    )


def test_top_urls_by_clicks():
    urls = [make_url(i, clicks=i % 4) for i in range(8)]

    top = top_urls(urls)

    assert [url.click_count for url in top] == [3, 3, 2, 2, 1]
    # Ties keep their incoming order
    assert [url.id for url in top[:2]] == ['url_3', 'url_7']


def test_recent_activity_filters_and_orders():
    events = [
        make_event(1, 'URL_SHORTENED'),
        make_event(2, 'STATISTICS_PAGE_LOADED'),
        make_event(3, 'CLICK_RECORDED'),
        make_event(4, 'STORAGE_SAVE_ERROR'),
        make_event(5, 'URL_DELETED'),
    ]

    assert [event.id for event in recent_activity(events)] == ['log_5', 'log_3', 'log_1']


def test_recent_activity_limit():
    events = [make_event(i, 'CLICK_RECORDED') for i in range(15)]
    activity = recent_activity(events)

    assert len(activity) == 10
    assert activity[0].id == 'log_14'


def test_summarize():
    urls = [
        make_url(1, clicks=4),
        make_url(2, clicks=1, minutes=-1),
        make_url(3, clicks=2, active=False),
    ]

    summary = summarize(urls, [make_event(1, 'URL_SHORTENED')], now=NOW)

    assert summary.total_urls == 3
    assert summary.active_urls == 1
    assert summary.total_clicks == 7
    assert [url.id for url in summary.top_urls] == ['url_1', 'url_3', 'url_2']

    data = summary.to_dict()
    assert data['top_urls'][0]['short_code'] == 'code1'
    assert data['recent_activity'][0]['action'] == 'URL_SHORTENED'


def test_summarize_empty():
    summary = summarize([], [])
    assert (summary.total_urls, summary.active_urls, summary.total_clicks) == (0, 0, 0)
    assert summary.top_urls == summary.recent_activity == []
