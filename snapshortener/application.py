"""Process-wide application wiring

Builds the storage DAO, event log, URL registry and expiry sweeper from the
configuration document, and exposes one shared instance per process.

Functions:
    create_dao(config) -> SnapshotBaseDAO
        Build the snapshot DAO for the configured storage backend.

    create_application(config, start_sweeper=None) -> Application
        Build a fully wired, independent application instance.

    get_application() -> Application
        Return the process-wide application (created on first call).

Example:
    >>> from snapshortener.application import create_application
    >>> from snapshortener.utils.config import load_config
    >>> application = create_application(load_config('local'), start_sweeper=False)
    >>> application.registry.shorten('https://example.com').short_url(application.base_url)
    'http://localhost:3000/Xa81kQ'
"""

import logging
import functools
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snapshortener.dao import SnapshotBaseDAO, SnapshotFileDAO, SnapshotMemoryDAO, SnapshotRedisDAO
from snapshortener.event_log import EventLog
from snapshortener.registry import URLRegistry
from snapshortener.sweeper import ExpirySweeper
from snapshortener.utils.config import app_env, app_prefix, load_config, project_root
from snapshortener.utils.logging import initialize_logging


logger = logging.getLogger(__name__)


@dataclass
class Application:
    config: dict[str, Any]
    dao: SnapshotBaseDAO
    event_log: EventLog
    registry: URLRegistry
    sweeper: ExpirySweeper | None = None

    @property
    def base_url(self) -> str:
        return self.config['base_url'].rstrip('/')

    @property
    def redirect_delay(self) -> int:
        return int(self.config['redirect']['delay_seconds'])

    @property
    def default_ttl_minutes(self) -> int:
        return int(self.config['registry']['default_ttl_minutes'])

    def close(self) -> None:
        if self.sweeper is not None:
            self.sweeper.stop()


def create_dao(config: dict[str, Any]) -> SnapshotBaseDAO:
    storage = config['storage']
    backend = storage['backend']

    if backend == 'redis':
        redis_config = {f'redis_{k}': v for k, v in storage['redis'].items()}
        dao = SnapshotRedisDAO(**redis_config, prefix=app_prefix(), healthcheck=False)
        # An unreachable store is not fatal: the registry keeps working in memory
        if not dao._healthcheck(raise_error=False):
            logger.warning('Redis is unreachable. Snapshots will not be persisted until it recovers.')
        return dao

    if backend == 'file':
        directory = Path(storage['file']['directory'])
        if not directory.is_absolute():
            directory = project_root() / directory
        return SnapshotFileDAO(directory=directory, prefix=app_prefix())

    return SnapshotMemoryDAO(prefix=app_prefix())


def create_application(config: dict[str, Any], start_sweeper: bool | None = None) -> Application:
    """Build an application instance from a configuration document

    Args:
        config (dict):
            Configuration document (see `snapshortener.utils.config`).
        start_sweeper (bool | None):
            Start the background expiry sweeper. Defaults to `sweeper.enabled`.

    Returns:
        Application: the wired application.
    """
    dao = create_dao(config)
    event_log = EventLog(dao=dao, capacity=config['event_log']['capacity'])
    registry = URLRegistry(
        dao=dao,
        event_log=event_log,
        max_active=config['registry']['max_active'],
        code_length=config['registry']['shortcode_length'],
    )

    sweeper = None
    if start_sweeper if start_sweeper is not None else config['sweeper']['enabled']:
        sweeper = ExpirySweeper(registry, interval=config['sweeper']['interval_seconds']).start()

    event_log.info(
        'APPLICATION_STARTED',
        {'appEnv': app_env(), 'storageBackend': config['storage']['backend'], 'urlCount': len(registry.list_all())},
    )
    return Application(config=config, dao=dao, event_log=event_log, registry=registry, sweeper=sweeper)


@functools.lru_cache(maxsize=1)
def get_application() -> Application:
    """Return the process-wide application, creating it on first call

    State lives for the whole process; there is no explicit teardown.
    """
    initialize_logging()
    return create_application(load_config())
