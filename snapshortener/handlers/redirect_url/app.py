import html
import logging
from typing import Any

from snapshortener.application import get_application
from snapshortener.handlers.responses import response_302, response_400, response_html
from snapshortener.utils.helpers import get_short_url, guarantee_500_response
from snapshortener.utils.runtime import header, path_parameter
from snapshortener.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
    NOT_FOUND_PAGE,
    EXPIRED_PAGE,
    REDIRECT_PAGE,
)


logger = logging.getLogger(__name__)


def response_404() -> dict:
    return response_html(404, NOT_FOUND_PAGE)


def response_410() -> dict:
    return response_html(410, EXPIRED_PAGE)


def response_delayed_redirect(*, location: str, delay: int) -> dict:
    escaped = html.escape(location, quote=True)
    return response_html(200, REDIRECT_PAGE.format(location=escaped), headers={'Refresh': f'{delay}; url={location}'})


@guarantee_500_response
def handler(event: dict, context: Any) -> dict:
    """Handle incoming requests to redirect short URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Look up the live short URL record
    - Step 3: Record the click with the caller's user agent and referrer
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        200: Successful redirect with a display delay (redirect.delay_seconds > 0)
            headers:
                Refresh: "<delay>; url=<target URL>"
        400: Bad client request
            message: missing shortcode in path parameters
        404: Fixed "Link Not Found" page
        410: Fixed "Link Expired" page
        500: Internal server error

    Args:
        event (dict):
            Request event containing the shortcode path parameter and headers.
        context (Any):
            Runtime context object (not used directly).

    Returns:
        dict:
            Proxy-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abc123'}, 'headers': {'User-Agent': 'curl/8.0'}}
        >>> response = handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    application = get_application()
    registry = application.registry
    event_log = application.event_log

    # 1- Extract shortcode from request's path
    shortcode = path_parameter(event, 'shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event, application.base_url))

    # 2- Look up the live short URL record
    short_url = registry.lookup_by_short_code(shortcode)
    if short_url is None:
        record = registry.find_by_short_code(shortcode)
        if record is None:
            event_log.warn('REDIRECT_NOT_FOUND', {'shortCode': shortcode})
            logger.info('Short URL not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
            return response_404()

        event_log.warn('REDIRECT_EXPIRED', {'shortCode': shortcode, 'expiresAt': record.expires_at.isoformat()})
        logger.info('Short URL expired. Responding with 410.', extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED})
        return response_410()

    # 3- Record the click
    recorded = registry.record_click(shortcode, header(event, 'User-Agent'), header(event, 'Referer'))
    if not recorded:  # pragma: no cover
        logger.info(
            'Short URL expired between lookup and click. Responding with 410.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED},
        )
        return response_410()

    # 4- Redirect client to target URL
    logger.info('Redirecting client to target URL.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    if application.redirect_delay > 0:
        return response_delayed_redirect(location=short_url.original_url, delay=application.redirect_delay)
    return response_302(location=short_url.original_url)
