MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'

PAGE_FOOTER = '<footer><p>Powered by URL Shortener</p><p>Hyderabad/Secunderabad, India</p></footer>'

NOT_FOUND_PAGE = (
    '<!DOCTYPE html><html><head><meta charset="utf-8"><title>Link Not Found</title></head><body>'
    '<h1>Link Not Found</h1>'
    '<p>The requested short URL does not exist or has been deleted.</p>'
    '<a href="/">Create New Short URL</a>'
    f'{PAGE_FOOTER}</body></html>'
)

EXPIRED_PAGE = (
    '<!DOCTYPE html><html><head><meta charset="utf-8"><title>Link Expired</title></head><body>'
    '<h1>Link Expired</h1>'
    '<p>This short URL has expired and is no longer valid.</p>'
    '<a href="/">Create New Short URL</a>'
    f'{PAGE_FOOTER}</body></html>'
)

REDIRECT_PAGE = (
    '<!DOCTYPE html><html><head><meta charset="utf-8"><title>Redirecting...</title></head><body>'
    '<h1>Redirecting...</h1>'
    '<p>You will be redirected shortly. If not, click the link below.</p>'
    '<a href="{location}">Continue to Destination</a>'
    '<p>Destination: {location}</p>'
    f'{PAGE_FOOTER}</body></html>'
)
