import pytest

from snapshortener.handlers.manage_urls import app as manage_urls_app
from snapshortener.handlers.redirect_url import app as redirect_url_app
from snapshortener.handlers.shorten_url import app as shorten_url_app
from snapshortener.handlers.statistics import app as statistics_app


@pytest.fixture(autouse=True)
def _application(monkeypatch, application):
    """Serve every handler from one isolated, memory-backed application."""
    for module in (manage_urls_app, redirect_url_app, shorten_url_app, statistics_app):
        monkeypatch.setattr(module, 'get_application', lambda: application)
    return application


@pytest.fixture
def registry(application):
    return application.registry


@pytest.fixture
def event_log(application):
    return application.event_log
