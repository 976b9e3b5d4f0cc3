import json
import logging
from typing import Any

from snapshortener.application import get_application
from snapshortener.exceptions import ConcurrencyLimitExceededError, DuplicateShortCodeError, ValidationFailedError
from snapshortener.handlers.responses import response_400, response_error, response_json
from snapshortener.utils.helpers import get_short_url, guarantee_500_response
from snapshortener.validation import validate_submission
from snapshortener.handlers.shorten_url.constants import (
    INVALID_JSON_BODY,
    INVALID_FIELD_TYPE,
    VALIDATION_FAILED,
    DUPLICATE_SHORT_CODE,
    CONCURRENCY_LIMIT_EXCEEDED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL, short code and expiry from request body
    - Step 2: Validate the whole submission
    - Step 3: Create the short URL record in the registry
    - Step 4: Respond to user with 201 success

    HTTP responses:
        201: Successful URL shortening
            message: success message
            id, original_url, short_code, short_url, created_at, expires_at
        400: Bad client request
            message: invalid JSON, wrong field types or failed validation
            errors: every violated validation rule
        409: Conflict
            message: short code already in use
        429: Too many active short URLs
            message: concurrency limit reached
        500: Internal server error

    Args:
        event (dict):
            Request event with a JSON body:
            {"original_url": str, "short_code": str | null, "expiry_minutes": int}
        context (Any):
            Runtime context object (not used directly).

    Returns:
        dict:
            Proxy-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"original_url": "https://example.com"}'}
        >>> response = handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['short_url']
        'http://localhost:3000/Xa81kQ'
    """
    application = get_application()
    registry = application.registry
    event_log = application.event_log

    # 1- Extract fields from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    original_url = request_body.get('original_url') or ''
    short_code = request_body.get('short_code') or None
    expiry_minutes = request_body.get('expiry_minutes', application.default_ttl_minutes)
    if not isinstance(original_url, str) or (short_code is not None and not isinstance(short_code, str)):
        return response_400(message="'original_url' and 'short_code' must be strings", error_code=INVALID_FIELD_TYPE)

    # 2- Validate the whole submission
    try:
        validate_submission(original_url, short_code, expiry_minutes, event_log=event_log)
    except ValidationFailedError as e:
        logger.info('Shortening request failed validation. Responding with 400.', extra={'errors': e.errors})
        return response_400(message='validation failed', error_code=VALIDATION_FAILED, errors=e.errors)

    # 3- Create the short URL record
    try:
        short_url = registry.shorten(original_url.strip(), short_code, int(expiry_minutes))
    except DuplicateShortCodeError as e:
        event_log.error('URL_CREATION_FAILED', {'error': str(e)})
        return response_error(409, 'Short code already exists', error_code=DUPLICATE_SHORT_CODE)
    except ConcurrencyLimitExceededError as e:
        event_log.error('URL_CREATION_FAILED', {'error': str(e)})
        return response_error(429, str(e), error_code=CONCURRENCY_LIMIT_EXCEEDED)

    short_url_string = get_short_url(short_url.short_code, event, application.base_url)
    event_log.info('URL_CREATION_SUCCESS', {'shortCode': short_url.short_code, 'expiryMinutes': int(expiry_minutes)})
    logger.info('Shortened URL. Responding with 201.', extra={'shortcode': short_url.short_code, 'event': SHORTEN_SUCCESS})

    # 4- Return successful response to user
    return response_json(
        201,
        {
            'message': f'Successfully shortened {short_url.original_url} to {short_url_string}',
            'id': short_url.id,
            'original_url': short_url.original_url,
            'short_code': short_url.short_code,
            'short_url': short_url_string,
            'created_at': short_url.created_at.isoformat(),
            'expires_at': short_url.expires_at.isoformat(),
        },
    )
