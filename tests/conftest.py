import copy

import pytest

from snapshortener.application import Application, create_application, get_application
from snapshortener.dao import SnapshotMemoryDAO
from snapshortener.event_log import EventLog
from snapshortener.registry import URLRegistry
from snapshortener.utils.config import DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Keep storage keys and config lookups independent of the host environment."""
    monkeypatch.delenv('APP_NAME', raising=False)
    monkeypatch.setenv('APP_ENV', 'test')


@pytest.fixture(autouse=True)
def _clear_application_cache():
    yield
    get_application.cache_clear()


@pytest.fixture
def dao() -> SnapshotMemoryDAO:
    return SnapshotMemoryDAO(prefix='testapp:test')


@pytest.fixture
def event_log(dao) -> EventLog:
    return EventLog(dao=dao, session_id='session_test')


@pytest.fixture
def registry(dao, event_log) -> URLRegistry:
    return URLRegistry(dao=dao, event_log=event_log)


@pytest.fixture
def config() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def application(config) -> Application:
    _application = create_application(config, start_sweeper=False)
    yield _application
    _application.close()
