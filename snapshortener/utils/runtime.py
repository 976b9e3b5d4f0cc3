"""Runtime utilities

Functions:
    header(event, name, default='') -> str:
        Case-insensitive lookup of a request header.
    path_parameter(event, name) -> str | None:
        Lookup of a request path parameter.

Example:
    >>> from snapshortener.utils.runtime import header
    >>> header({'headers': {'user-agent': 'curl/8.0'}}, 'User-Agent')
    'curl/8.0'
"""

from snapshortener.types import HandlerEvent


def header(event: HandlerEvent, name: str, default: str = '') -> str:
    """Return a request header value regardless of header name casing"""
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value if value is not None else default
    return default


def path_parameter(event: HandlerEvent, name: str) -> str | None:
    return (event.get('pathParameters') or {}).get(name)
