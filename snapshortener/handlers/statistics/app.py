from typing import Any

from snapshortener.application import get_application
from snapshortener.dashboard import summarize
from snapshortener.handlers.responses import response_json
from snapshortener.utils.helpers import guarantee_500_response


@guarantee_500_response
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Respond with the statistics dashboard summary

    Body:
        total_urls, active_urls, total_clicks,
        top_urls (5 most clicked), recent_activity (10 latest URL/click events)
    """
    application = get_application()
    application.event_log.info('STATISTICS_PAGE_LOADED')

    summary = summarize(application.registry.list_all(), application.event_log.stored())
    return response_json(200, summary.to_dict())
