"""Response builders shared by all handlers

Responses follow the proxy integration shape:

    {"statusCode": 200, "headers": {...}, "body": "<JSON or HTML string>"}
"""

import json
from typing import Any


JSON_HEADERS = {'Content-Type': 'application/json'}
HTML_HEADERS = {'Content-Type': 'text/html; charset=utf-8'}


def response_json(status_code: int, body: dict[str, Any] | list[Any], headers: dict[str, str] | None = None) -> dict:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None, **extra: Any) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    body.update(extra)
    return response_json(400, body)


def response_error(status_code: int, message: str, error_code: str | None = None) -> dict:
    body = {'message': message}
    if error_code:
        body['errorCode'] = error_code
    return response_json(status_code, body)


def response_html(status_code: int, html: str, headers: dict[str, str] | None = None) -> dict:
    return {
        'statusCode': status_code,
        'headers': {**HTML_HEADERS, **(headers or {})},
        'body': html,
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_204() -> dict:
    return {'statusCode': 204, 'headers': {}, 'body': ''}
