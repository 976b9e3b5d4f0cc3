import logging
from typing import Any

from snapshortener.application import get_application
from snapshortener.handlers.responses import response_204, response_400, response_error, response_json
from snapshortener.serialization import serialize_url
from snapshortener.utils.helpers import guarantee_500_response
from snapshortener.utils.runtime import path_parameter


logger = logging.getLogger(__name__)

MISSING_URL_ID = 'MISSING_URL_ID'
URL_NOT_FOUND = 'URL_NOT_FOUND'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'


@guarantee_500_response
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """List (GET) or delete (DELETE /{id}) short URL records

    HTTP responses:
        200: GET, every record newest first, each with its public short_url
        204: DELETE, record removed and its short code freed
        400: DELETE without an 'id' path parameter
        404: DELETE of an unknown id
        405: any other method
    """
    application = get_application()
    registry = application.registry
    method = (event.get('httpMethod') or 'GET').upper()

    if method == 'GET':
        urls = [
            {**serialize_url(url), 'short_url': url.short_url(application.base_url)}
            for url in registry.list_all()
        ]
        return response_json(200, {'urls': urls, 'count': len(urls)})

    if method == 'DELETE':
        url_id = path_parameter(event, 'id')
        if not url_id:
            return response_400(message="missing 'id' in path", error_code=MISSING_URL_ID)
        if not registry.delete(url_id):
            logger.info('Short URL record not found. Responding with 404.', extra={'urlId': url_id})
            return response_error(404, f"Short URL with id '{url_id}' not found", error_code=URL_NOT_FOUND)
        return response_204()

    return response_error(405, f'Method {method} not allowed', error_code=METHOD_NOT_ALLOWED)
