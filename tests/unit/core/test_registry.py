"""Unit tests for the URL registry.

Test coverage includes:

1. Shortening
   - Generated short codes have the configured length and charset
   - Custom short codes are used verbatim and must be unique
   - Collisions of generated codes are retried, then reported
   - The active URL cap rejects a sixth active record

2. Lookups and clicks
   - Expired records never resolve, even before a sweep runs
   - Clicks on unknown or expired codes are rejected without side effects
   - Clicks on live codes append a click and bump the counter

3. Expiry sweep
   - Expired records are deactivated, not removed
   - Sweeping is idempotent
   - Expired records don't count against the cap

4. Persistence
   - A new registry on the same storage sees the same records
   - Storage failures are logged as events, never raised
   - Malformed snapshots leave the registry empty
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

import snapshortener.registry as registry_module
from snapshortener.constants import Limits, StorageSlot
from snapshortener.dao.base import SnapshotBaseDAO
from snapshortener.dao.exceptions import DataStoreError
from snapshortener.event_log import EventLog
from snapshortener.exceptions import ConcurrencyLimitExceededError, DuplicateShortCodeError
from snapshortener.registry import URLRegistry
from snapshortener.utils.shortener import ALPHABET


NOW = '2026-10-19 12:00:00'


def actions(event_log: EventLog) -> list[str]:
    return [event.action for event in event_log.events]


@pytest.fixture
def failing_dao():
    dao = MagicMock(spec=SnapshotBaseDAO)
    dao.get.return_value = None
    dao.put.side_effect = DataStoreError("Can't connect to Redis at localhost:6379/0.")
    return dao


# -------------------------------
# Shortening
# -------------------------------


def test_shorten_generates_short_code(registry):
    """Ensure a generated short code has the default length and only uses the base62 alphabet."""
    with freeze_time(NOW):
        url = registry.shorten('https://example.com/a', None, 1)

    assert len(url.short_code) == 6
    assert set(url.short_code) <= set(ALPHABET)
    assert url.id.startswith('url_')
    assert url.expires_at - url.created_at == timedelta(minutes=1)
    assert url.is_active is True
    assert url.click_count == 0
    assert url.clicks == []


def test_shorten_uses_configured_code_length(dao):
    registry = URLRegistry(dao=dao, code_length=10)
    assert len(registry.shorten('https://example.com').short_code) == 10


def test_shorten_with_custom_code(registry):
    url = registry.shorten('https://example.com/b', 'abc', 5)

    assert url.short_code == 'abc'
    assert registry.lookup_by_short_code('abc') == url
    assert 'URL_SHORTENED' in actions(registry.event_log)


def test_shorten_rejects_duplicate_custom_code(registry):
    """Ensure a second record with the same custom code is rejected and the first one is untouched."""
    first = registry.shorten('https://example.com/b', 'abc', 5)

    with pytest.raises(DuplicateShortCodeError):
        registry.shorten('https://example.com/c', 'abc', 5)

    assert registry.lookup_by_short_code('abc').original_url == 'https://example.com/b'
    assert [url.id for url in registry.list_all()] == [first.id]
    assert 'DUPLICATE_SHORT_CODE' in actions(registry.event_log)


def test_shorten_retries_generated_code_collisions(registry, monkeypatch):
    """Ensure a colliding generated code is redrawn before giving up."""
    registry.shorten('https://example.com/taken', 'taken1')
    codes = iter(['taken1', 'taken1', 'fresh1'])
    monkeypatch.setattr(registry_module, 'generate_shortcode', lambda length: next(codes))

    url = registry.shorten('https://example.com/new')

    assert url.short_code == 'fresh1'


def test_shorten_gives_up_after_repeated_collisions(registry, monkeypatch):
    registry.shorten('https://example.com/taken', 'taken1')
    generator = MagicMock(return_value='taken1')
    monkeypatch.setattr(registry_module, 'generate_shortcode', generator)

    with pytest.raises(DuplicateShortCodeError):
        registry.shorten('https://example.com/new')

    assert generator.call_count == Limits.GENERATED_SHORTCODE_ATTEMPTS


def test_shorten_enforces_active_cap(registry):
    """Ensure the sixth active record is rejected and deleting one frees a slot."""
    urls = [registry.shorten(f'https://example.com/{i}', None, 30) for i in range(5)]

    with pytest.raises(ConcurrencyLimitExceededError, match='Maximum of 5 concurrent URLs allowed.'):
        registry.shorten('https://example.com/6', None, 30)

    assert len(registry.list_all()) == 5
    assert 'CONCURRENT_LIMIT_REACHED' in actions(registry.event_log)

    assert registry.delete(urls[0].id) is True
    assert registry.shorten('https://example.com/6', None, 30).original_url == 'https://example.com/6'


def test_shorten_cap_is_configurable(dao):
    registry = URLRegistry(dao=dao, max_active=1)
    registry.shorten('https://example.com/1')

    with pytest.raises(ConcurrencyLimitExceededError, match='Maximum of 1 concurrent URLs allowed.'):
        registry.shorten('https://example.com/2')


def test_expired_records_do_not_count_against_cap(registry):
    """Ensure records past their deadline are swept before the cap is checked."""
    with freeze_time(NOW) as frozen:
        for i in range(5):
            registry.shorten(f'https://example.com/{i}', None, 1)
        frozen.tick(timedelta(minutes=2))

        url = registry.shorten('https://example.com/6', None, 1)

    assert url.is_active is True
    assert registry.active_count() == 1
    assert len(registry.list_all()) == 6


# -------------------------------
# Lookups and clicks
# -------------------------------


def test_generated_code_expires_after_deadline(registry):
    """Ensure a 1 minute record stops resolving after 61 seconds and is kept as inactive after a sweep."""
    with freeze_time(NOW) as frozen:
        url = registry.shorten('https://example.com/a', None, 1)
        frozen.tick(timedelta(seconds=61))

        # Lazy expiry: the record is inactive for lookups before the sweep
        assert registry.lookup_by_short_code(url.short_code) is None
        assert registry.sweep() == 1
        assert registry.lookup_by_short_code(url.short_code) is None

    [listed] = registry.list_all()
    assert listed.id == url.id
    assert listed.is_active is False


def test_lookup_is_idempotent(registry):
    url = registry.shorten('https://example.com/a', 'abc')
    assert registry.lookup_by_short_code('abc') == registry.lookup_by_short_code('abc') == url


def test_lookup_unknown_code(registry):
    assert registry.lookup_by_short_code('nope') is None
    assert registry.find_by_short_code('nope') is None


def test_find_returns_expired_records(registry):
    with freeze_time(NOW) as frozen:
        registry.shorten('https://example.com/a', 'abc', 1)
        frozen.tick(timedelta(minutes=5))

        assert registry.lookup_by_short_code('abc') is None
        assert registry.find_by_short_code('abc').short_code == 'abc'


def test_record_click_on_unknown_code(registry, dao):
    """Ensure a click on an unknown code only leaves a CLICK_REJECTED event behind."""
    registry.shorten('https://example.com/a', 'abc')
    snapshot = dao.get(StorageSlot.URLS)
    before = len(registry.event_log.events)

    assert registry.record_click('xyz', 'UA', '') is False

    assert dao.get(StorageSlot.URLS) == snapshot
    assert actions(registry.event_log)[before:] == ['CLICK_REJECTED']
    assert registry.lookup_by_short_code('abc').click_count == 0


def test_record_click_on_live_code(registry):
    registry.shorten('https://example.com/a', 'abc')

    assert registry.record_click('abc', 'UA', 'https://ref.example') is True

    url = registry.lookup_by_short_code('abc')
    assert url.click_count == 1
    [click] = url.clicks
    assert click.user_agent == 'UA'
    assert click.referrer == 'https://ref.example'
    assert click.ip_address == 'xxx.xxx.xxx.xxx'
    assert click.location == 'Hyderabad/Secunderabad'
    assert 'CLICK_RECORDED' in actions(registry.event_log)


def test_record_click_on_expired_code(registry):
    with freeze_time(NOW) as frozen:
        registry.shorten('https://example.com/a', 'abc', 1)
        frozen.tick(timedelta(seconds=61))

        assert registry.record_click('abc', 'UA', '') is False

    assert registry.find_by_short_code('abc').click_count == 0


def test_click_count_matches_clicks(registry):
    registry.shorten('https://example.com/a', 'abc')
    for _ in range(3):
        registry.record_click('abc', 'UA', '')

    url = registry.lookup_by_short_code('abc')
    assert url.click_count == len(url.clicks) == 3


# -------------------------------
# Listing and deletion
# -------------------------------


def test_list_all_newest_first(registry):
    with freeze_time(NOW) as frozen:
        first = registry.shorten('https://example.com/1')
        frozen.tick(timedelta(seconds=1))
        second = registry.shorten('https://example.com/2')

    assert [url.id for url in registry.list_all()] == [second.id, first.id]


def test_list_all_returns_copies(registry):
    """Ensure callers can't mutate registry state through returned records."""
    registry.shorten('https://example.com/a', 'abc')

    [url] = registry.list_all()
    url.is_active = False
    url.clicks.append(MagicMock())

    stored = registry.lookup_by_short_code('abc')
    assert stored.is_active is True
    assert stored.clicks == []


def test_delete_frees_short_code(registry):
    url = registry.shorten('https://example.com/a', 'abc')

    assert registry.delete(url.id) is True
    assert registry.lookup_by_short_code('abc') is None
    assert registry.shorten('https://example.com/b', 'abc').original_url == 'https://example.com/b'
    assert 'URL_DELETED' in actions(registry.event_log)


def test_delete_unknown_id(registry):
    assert registry.delete('url_missing') is False


# -------------------------------
# Expiry sweep
# -------------------------------


def test_sweep_is_idempotent(registry):
    with freeze_time(NOW) as frozen:
        registry.shorten('https://example.com/a', None, 1)
        registry.shorten('https://example.com/b', None, 10)
        frozen.tick(timedelta(minutes=2))

        assert registry.sweep() == 1
        assert registry.sweep() == 0

    assert registry.active_count() == 1
    assert actions(registry.event_log).count('EXPIRED_URLS_CLEANED') == 1


def test_sweep_with_nothing_expired(registry):
    registry.shorten('https://example.com/a')
    assert registry.sweep() == 0
    assert 'EXPIRED_URLS_CLEANED' not in actions(registry.event_log)


# -------------------------------
# Persistence
# -------------------------------


def test_registry_reloads_persisted_state(registry, dao):
    """Ensure a fresh registry over the same storage sees identical records."""
    with freeze_time(NOW) as frozen:
        registry.shorten('https://example.com/a', 'abc', 1)
        registry.shorten('https://example.com/b', 'def', 10)
        registry.record_click('def', 'UA', 'https://ref.example')
        frozen.tick(timedelta(minutes=2))
        registry.sweep()

    reloaded = URLRegistry(dao=dao, event_log=EventLog(dao=dao))

    assert reloaded.list_all() == registry.list_all()
    assert 'URLS_LOADED_FROM_STORAGE' in actions(reloaded.event_log)


def test_storage_write_failure_is_not_raised(failing_dao):
    """Ensure a failing store degrades to in-memory operation with STORAGE_SAVE_ERROR events."""
    event_log = EventLog(dao=failing_dao)
    registry = URLRegistry(dao=failing_dao, event_log=event_log)

    url = registry.shorten('https://example.com/a', 'abc')

    assert registry.lookup_by_short_code('abc') == url
    assert registry.persist() is False
    assert 'STORAGE_SAVE_ERROR' in actions(event_log)


def test_storage_read_failure_starts_empty():
    dao = MagicMock(spec=SnapshotBaseDAO)
    dao.get.side_effect = DataStoreError('unreachable')
    event_log = EventLog()

    registry = URLRegistry(dao=dao, event_log=event_log)

    assert registry.list_all() == []
    assert actions(event_log) == ['STORAGE_LOAD_ERROR']


def test_malformed_snapshot_starts_empty(dao):
    dao.put(StorageSlot.URLS, '{not json')
    event_log = EventLog()

    registry = URLRegistry(dao=dao, event_log=event_log)

    assert registry.list_all() == []
    assert actions(event_log) == ['STORAGE_LOAD_ERROR']


def test_shorten_type_checked(registry):
    with pytest.raises(BeartypeCallHintParamViolation):
        registry.shorten('https://example.com', None, '30')
