"""Utility functions for application configuration management.

Configuration lives in one YAML document per application environment
(`APP_ENV`) under the project's `config/` directory:

    config/
    ├── local.yml
    └── dev.yml

Each document is merged over built-in defaults, so it only needs to carry the
keys it overrides. The full structure looks like this:

    base_url: http://localhost:3000
    storage:
      backend: redis            # redis | file | memory
      redis:
        host: localhost
        port: 6379
        db: 0
      file:
        directory: .snapshortener
    registry:
      max_active: 5
      shortcode_length: 6
      default_ttl_minutes: 30
    sweeper:
      enabled: true
      interval_seconds: 60
    event_log:
      capacity: 1000
    redirect:
      delay_seconds: 0

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the storage key prefix, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_config(env: str | None = None) -> dict
        Load the configuration document for an environment.

Example:
    >>> from snapshortener.utils.config import load_config
    >>> config = load_config('local')
    >>> config['storage']['backend']
    'memory'
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from snapshortener.constants import ENV, Defaults, Limits
from snapshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

STORAGE_BACKENDS = frozenset({'redis', 'file', 'memory'})

DEFAULT_CONFIG: dict[str, Any] = {
    'base_url': Defaults.BASE_URL,
    'storage': {
        'backend': 'memory',
        'redis': {'host': 'localhost', 'port': 6379, 'db': 0},
        'file': {'directory': '.snapshortener'},
    },
    'registry': {
        'max_active': Limits.MAX_ACTIVE_URLS,
        'shortcode_length': Defaults.SHORTCODE_LENGTH,
        'default_ttl_minutes': Defaults.TTL_MINUTES,
    },
    'sweeper': {
        'enabled': True,
        'interval_seconds': Defaults.SWEEP_INTERVAL_SECONDS,
    },
    'event_log': {
        'capacity': Limits.LOG_CAPACITY,
    },
    'redirect': {
        'delay_seconds': Defaults.REDIRECT_DELAY_SECONDS,
    },
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the project root, preferring the PROJECT_ROOT environment variable"""
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return storage key prefix as <app name>:<app env>

    Example:
        >>> os.environ['APP_NAME'] = 'snapshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'snapshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    backend = config['storage'].get('backend')
    if backend not in STORAGE_BACKENDS:
        raise BadConfigurationError(f"Unknown storage backend '{backend}' (expected one of: {', '.join(sorted(STORAGE_BACKENDS))}).")

    max_active = config['registry'].get('max_active')
    if not isinstance(max_active, int) or max_active < 1:
        raise BadConfigurationError(f'registry.max_active must be a positive integer (given value: {max_active}).')

    capacity = config['event_log'].get('capacity')
    if not isinstance(capacity, int) or capacity < 1:
        raise BadConfigurationError(f'event_log.capacity must be a positive integer (given value: {capacity}).')

    interval = config['sweeper'].get('interval_seconds')
    if not isinstance(interval, (int, float)) or interval <= 0:
        raise BadConfigurationError(f'sweeper.interval_seconds must be positive (given value: {interval}).')

    return config


def load_config(env: str | None = None) -> dict[str, Any]:
    """Load configuration for an application environment

    Reads `config/<env>.yml` under the project root and merges it over the
    built-in defaults. In the local environment a missing file is not an
    error: the defaults are returned as-is.

    Args:
        env (str | None):
            Application environment. Defaults to `app_env()`.

    Returns:
        dict: The merged configuration document.

    Raises:
        FileNotFoundError:
            If the configuration file is missing outside the local environment.
        BadConfigurationError:
            If the document is not a mapping or carries invalid values.

    Example:
        >>> config = load_config('dev')
        >>> config['registry']['max_active']
        5
    """
    env = (env or app_env()).lower()
    path = project_root() / 'config' / f'{env}.yml'

    if not path.is_file():
        if env == 'local':
            logger.debug('No configuration file found. Using defaults.', extra={'configPath': str(path)})
            return _validate(copy.deepcopy(DEFAULT_CONFIG))
        raise FileNotFoundError(f'Configuration file {path} not found.')

    with path.open('r', encoding='utf-8') as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping.')

    logger.debug('Loaded configuration file.', extra={'configPath': str(path), 'appEnv': env})
    return _validate(_merge(DEFAULT_CONFIG, document))
