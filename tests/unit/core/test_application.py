"""Unit tests for process-wide application wiring.

Test coverage includes:

1. DAO selection
   - Memory, file and Redis backends are built from the storage config.
   - An unreachable Redis is reported, not raised.
2. Application assembly
   - Registry limits and event log capacity come from the config.
   - The expiry sweeper starts only when enabled.
3. Process-wide instance
   - get_application() builds once per process.
"""

from unittest.mock import MagicMock, patch

import pytest

import snapshortener.application as application_module
from snapshortener.application import create_application, create_dao, get_application
from snapshortener.dao import SnapshotFileDAO, SnapshotMemoryDAO


# -------------------------------
# 1. DAO selection
# -------------------------------


def test_create_memory_dao(config):
    assert isinstance(create_dao(config), SnapshotMemoryDAO)


def test_create_file_dao_relative_to_project_root(config, tmp_path, monkeypatch):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    monkeypatch.setenv('APP_NAME', 'snapshortener')
    config['storage']['backend'] = 'file'

    dao = create_dao(config)

    assert isinstance(dao, SnapshotFileDAO)
    assert dao.directory == tmp_path / '.snapshortener'
    assert dao.prefix == 'snapshortener:test'


def test_create_file_dao_absolute_directory(config, tmp_path):
    config['storage'] = {**config['storage'], 'backend': 'file', 'file': {'directory': str(tmp_path / 'data')}}
    assert create_dao(config).directory == tmp_path / 'data'


def test_create_redis_dao(config, monkeypatch):
    """Ensure the Redis DAO receives the redis_* parameters and the app prefix, and is healthchecked."""
    monkeypatch.setenv('APP_NAME', 'snapshortener')
    config['storage']['backend'] = 'redis'
    config['storage']['redis'] = {'host': 'redis.internal', 'port': 6380, 'db': 2}

    with patch.object(application_module, 'SnapshotRedisDAO') as dao_class:
        dao_class.return_value._healthcheck.return_value = True
        dao = create_dao(config)

    dao_class.assert_called_once_with(
        redis_host='redis.internal', redis_port=6380, redis_db=2, prefix='snapshortener:test', healthcheck=False
    )
    dao._healthcheck.assert_called_once_with(raise_error=False)


def test_create_redis_dao_unreachable(config, caplog):
    config['storage']['backend'] = 'redis'

    with patch.object(application_module, 'SnapshotRedisDAO') as dao_class:
        dao_class.return_value._healthcheck.return_value = False
        dao = create_dao(config)

    assert dao is dao_class.return_value
    assert 'Redis is unreachable' in caplog.text


# -------------------------------
# 2. Application assembly
# -------------------------------


def test_create_application(config):
    config['registry']['max_active'] = 2
    config['registry']['shortcode_length'] = 8
    config['event_log']['capacity'] = 50
    config['base_url'] = 'https://sho.rt/'

    application = create_application(config, start_sweeper=False)

    assert application.registry.max_active == 2
    assert application.registry.code_length == 8
    assert application.event_log.capacity == 50
    assert application.registry.event_log is application.event_log
    assert application.sweeper is None
    assert application.base_url == 'https://sho.rt'
    assert application.redirect_delay == 0
    assert application.default_ttl_minutes == 30
    assert [event.action for event in application.event_log.events] == ['APPLICATION_STARTED']


def test_create_application_starts_sweeper(config):
    config['sweeper']['interval_seconds'] = 3600

    application = create_application(config)
    try:
        assert application.sweeper.running
        assert application.sweeper.interval == 3600
    finally:
        application.close()

    assert not application.sweeper.running


def test_create_application_with_sweeper_disabled(config):
    config['sweeper']['enabled'] = False
    assert create_application(config).sweeper is None


def test_create_application_loads_existing_state(config):
    dao = SnapshotMemoryDAO()
    with patch.object(application_module, 'create_dao', return_value=dao):
        first = create_application(config, start_sweeper=False)
        first.registry.shorten('https://example.com', 'abc')
        second = create_application(config, start_sweeper=False)

    assert second.registry.lookup_by_short_code('abc').original_url == 'https://example.com'
    assert second.event_log.events[-1].details['urlCount'] == 1


# -------------------------------
# 3. Process-wide instance
# -------------------------------


@pytest.fixture
def quiet_startup(monkeypatch, config):
    config['sweeper']['enabled'] = False
    monkeypatch.setattr(application_module, 'initialize_logging', MagicMock())
    monkeypatch.setattr(application_module, 'load_config', MagicMock(return_value=config))


def test_get_application_is_cached(quiet_startup):
    first = get_application()
    assert get_application() is first
    application_module.load_config.assert_called_once_with()
    application_module.initialize_logging.assert_called_once_with()
