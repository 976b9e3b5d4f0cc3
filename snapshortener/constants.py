from enum import StrEnum


class Limits:
    """Registry admission and validation bounds."""

    MAX_ACTIVE_URLS = 5  # Maximum simultaneously active short URLs
    MIN_EXPIRY_MINUTES = 1
    MAX_EXPIRY_MINUTES = 43_200  # 60 * 24 * 30
    MIN_SHORTCODE_LENGTH = 3
    MAX_SHORTCODE_LENGTH = 20
    LOG_CAPACITY = 1_000  # Persisted event log ring buffer size
    GENERATED_SHORTCODE_ATTEMPTS = 5


class Defaults:
    """Default values for registry operations."""

    TTL_MINUTES = 30
    SHORTCODE_LENGTH = 6
    SWEEP_INTERVAL_SECONDS = 60.0
    REDIRECT_DELAY_SECONDS = 0
    BASE_URL = 'http://localhost:3000'


class Privacy:
    """Fixed values recorded in place of real client data."""

    MASKED_IP = 'xxx.xxx.xxx.xxx'
    CLICK_LOCATION = 'Hyderabad/Secunderabad'
    JURISDICTION = 'Hyderabad/Secunderabad, India'
    COMPLIANCE = 'Data processed under Indian IT Act 2000'


class StorageSlot(StrEnum):
    """Names of the two durable storage slots."""

    URLS = 'urls'
    LOGS = 'logs'


class LogLevel(StrEnum):
    INFO = 'INFO'
    WARN = 'WARN'
    ERROR = 'ERROR'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'


RESERVED_SHORTCODES = frozenset({'admin', 'api', 'www', 'app', 'stats', 'analytics'})
MALICIOUS_PATTERNS = ('javascript:', 'data:', 'vbscript:', 'file:')
ALLOWED_SCHEMES = frozenset({'http', 'https'})

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
