"""Input validation rules for shortening requests

Each validator runs every check and reports all violations, not just the
first one found.

Functions:
    validate_url(url, event_log=None) -> ValidationResult
        Require a well-formed absolute http(s) URL free of dangerous schemes.

    validate_short_code(short_code, event_log=None) -> ValidationResult
        Check length, charset and reserved words of a custom short code.
        An empty short code is valid: it means "generate one".

    validate_expiry_minutes(minutes) -> ValidationResult
        Require a whole number of minutes between 1 and 43200 (30 days).

    validate_submission(url, short_code, expiry_minutes, event_log=None) -> None
        Run all of the above and raise ValidationFailedError on any violation.

Example:
    >>> validate_short_code('ab').errors
    ('Short code must be between 3 and 20 characters',)
    >>> validate_expiry_minutes(43200).is_valid
    True
"""

import re
import logging
from urllib.parse import urlsplit

from snapshortener.constants import (
    ALLOWED_SCHEMES,
    MALICIOUS_PATTERNS,
    RESERVED_SHORTCODES,
    Limits,
)
from snapshortener.event_log import EventLog
from snapshortener.exceptions import ValidationFailedError
from snapshortener.models import ValidationResult


logger = logging.getLogger(__name__)

SHORTCODE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
UNSAFE_URL_CHARACTERS = re.compile(r'[\s\x00-\x1f\x7f]')

URL_REQUIRED = 'URL is required'
URL_INVALID_FORMAT = 'Invalid URL format'
URL_BAD_PROTOCOL = 'URL must use HTTP or HTTPS protocol'
URL_MALICIOUS = 'URL contains potentially malicious content'
SHORTCODE_BAD_LENGTH = (
    f'Short code must be between {Limits.MIN_SHORTCODE_LENGTH} and {Limits.MAX_SHORTCODE_LENGTH} characters'
)
SHORTCODE_BAD_CHARSET = 'Short code can only contain letters, numbers, hyphens, and underscores'
SHORTCODE_RESERVED = 'Short code cannot use reserved words'
EXPIRY_NOT_INTEGER = 'Expiry time must be a whole number of minutes'
EXPIRY_TOO_SHORT = 'Expiry time must be at least 1 minute'
EXPIRY_TOO_LONG = 'Expiry time cannot exceed 30 days'


def _parse_absolute_url(url: str) -> str | None:
    """Return the lowercased scheme of an absolute URL, or None if `url` isn't one"""
    url = url.strip()
    # urlsplit() silently drops tabs and newlines, so reject them up front
    if UNSAFE_URL_CHARACTERS.search(url):
        return None

    try:
        parts = urlsplit(url)
        # Accessing .port validates the port component
        parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if not scheme:
        return None
    if scheme in ALLOWED_SCHEMES and not parts.hostname:
        return None
    return scheme


def validate_url(url: str, event_log: EventLog | None = None) -> ValidationResult:
    errors = []

    if not url or not url.strip():
        errors.append(URL_REQUIRED)
    else:
        scheme = _parse_absolute_url(url)
        if scheme is None:
            errors.append(URL_INVALID_FORMAT)
        elif scheme not in ALLOWED_SCHEMES:
            errors.append(URL_BAD_PROTOCOL)

        # String-level check, independent of what the parser made of the URL
        lowered = url.lower()
        if any(pattern in lowered for pattern in MALICIOUS_PATTERNS):
            errors.append(URL_MALICIOUS)
            logger.warning('Rejected URL with a dangerous scheme pattern.', extra={'url': url[:100]})
            if event_log is not None:
                event_log.warn('MALICIOUS_URL_ATTEMPT', {'url': url})

    result = ValidationResult.from_errors(errors)
    if event_log is not None:
        event_log.info(
            'URL_VALIDATION',
            {'url': (url or '')[:100], 'isValid': result.is_valid, 'errorCount': len(errors)},
        )
    return result


def validate_short_code(short_code: str | None, event_log: EventLog | None = None) -> ValidationResult:
    errors = []

    if short_code and short_code.strip():
        if not Limits.MIN_SHORTCODE_LENGTH <= len(short_code) <= Limits.MAX_SHORTCODE_LENGTH:
            errors.append(SHORTCODE_BAD_LENGTH)

        if not SHORTCODE_PATTERN.match(short_code):
            errors.append(SHORTCODE_BAD_CHARSET)

        if short_code.lower() in RESERVED_SHORTCODES:
            errors.append(SHORTCODE_RESERVED)

    result = ValidationResult.from_errors(errors)
    if event_log is not None:
        event_log.info(
            'SHORTCODE_VALIDATION',
            {'shortCode': short_code, 'isValid': result.is_valid, 'errorCount': len(errors)},
        )
    return result


def validate_expiry_minutes(minutes: int) -> ValidationResult:
    # bool is an int subclass, but True minutes is nonsense
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        return ValidationResult.from_errors([EXPIRY_NOT_INTEGER])
    if isinstance(minutes, float) and not minutes.is_integer():
        return ValidationResult.from_errors([EXPIRY_NOT_INTEGER])

    errors = []
    if minutes < Limits.MIN_EXPIRY_MINUTES:
        errors.append(EXPIRY_TOO_SHORT)
    if minutes > Limits.MAX_EXPIRY_MINUTES:
        errors.append(EXPIRY_TOO_LONG)
    return ValidationResult.from_errors(errors)


def validate_submission(
    url: str,
    short_code: str | None,
    expiry_minutes: int,
    event_log: EventLog | None = None,
) -> None:
    """Validate a whole shortening request, rejecting it wholesale on any violation

    Raises:
        ValidationFailedError:
            Carrying every violated rule across URL, short code and expiry.
    """
    errors = [
        *validate_url(url, event_log).errors,
        *validate_short_code(short_code, event_log).errors,
        *validate_expiry_minutes(expiry_minutes).errors,
    ]
    if errors:
        if event_log is not None:
            event_log.warn('FORM_VALIDATION_FAILED', {'errors': errors})
        raise ValidationFailedError(errors)
