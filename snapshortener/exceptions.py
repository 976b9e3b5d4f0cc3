class SnapShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:snapshortener_error'


class ValidationFailedError(SnapShortenerError):
    """Raised when submitted input breaks one or more validation rules.

    Attributes:
        errors (list[str]):
            Every violated rule, in the order the checks ran.
    """

    error_code = 'input:validation_failed'

    def __init__(self, errors: list[str] | tuple[str, ...], message: str | None = None):
        self.errors = list(errors)
        super().__init__(message or 'Validation failed: ' + '; '.join(self.errors))


class DuplicateShortCodeError(SnapShortenerError):
    """Raised when a short code is already mapped to an existing record."""

    error_code = 'registry:duplicate_short_code'


class ConcurrencyLimitExceededError(SnapShortenerError):
    """Raised when the number of active short URLs has reached the cap."""

    error_code = 'registry:concurrency_limit_exceeded'


class StorageUnavailableError(SnapShortenerError):
    """Raised when durable storage can't be read or written."""

    error_code = 'storage:storage_unavailable'


class MalformedSnapshotError(SnapShortenerError):
    """Raised when a persisted snapshot can't be decoded."""

    error_code = 'storage:malformed_snapshot'


class ConfigurationError(SnapShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
