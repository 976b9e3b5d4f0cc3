"""Helper utilities for request handlers.

Functions:
    base_url() -> str
        Extract the public base URL from a handler event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    guarantee_500_response(func) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a handler:

        >>> from snapshortener.utils.helpers import base_url
        >>> event = {"requestContext": {"domainName": "sho.rt"}}
        >>> base_url(event)
        'https://sho.rt'

        >>> base_url({})
        'http://localhost:3000'
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from snapshortener.constants import Defaults, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any], fallback: str = Defaults.BASE_URL) -> str:
    """Extract public base URL from a handler event

    Args:
        event (dict): handler event object
        fallback (str): base URL used when the event carries no domain

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "http://localhost:3000"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')

    if domain:
        return f'https://{domain}'
    else:
        # Fallback: local invocation (tests, scripts, etc.)
        return fallback.rstrip('/')


def get_short_url(shortcode: str, event: dict[str, Any], fallback: str = Defaults.BASE_URL) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): handler event object
        fallback (str): base URL used when the event carries no domain

    Returns:
        str: shortened URL, e.g. "https://sho.rt/abc123"
    """
    return f'{base_url(event, fallback)}/{shortcode}'


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator: respond with 500 instead of propagating unexpected exceptions

    Example:
        >>> @guarantee_500_response
        ... def handler(event, context):
        ...     raise RuntimeError('boom')
        >>> handler({}, None)['statusCode']
        500
    """

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        try:
            return func(event, context, *args, **kwargs)
        except Exception as e:
            logger.exception(
                'Unhandled exception in handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'error': e.__class__.__name__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
