from snapshortener.models import ClickEvent, LogEvent, ShortenedURL, ValidationResult
from snapshortener.event_log import EventLog
from snapshortener.registry import URLRegistry
from snapshortener.sweeper import ExpirySweeper
from snapshortener.validation import validate_url, validate_short_code, validate_expiry_minutes, validate_submission


__all__ = [
    'ClickEvent',
    'LogEvent',
    'ShortenedURL',
    'ValidationResult',
    'EventLog',
    'URLRegistry',
    'ExpirySweeper',
    'validate_url',
    'validate_short_code',
    'validate_expiry_minutes',
    'validate_submission',
]
