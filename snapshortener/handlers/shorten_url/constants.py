INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_FIELD_TYPE = 'INVALID_FIELD_TYPE'
VALIDATION_FAILED = 'VALIDATION_FAILED'
DUPLICATE_SHORT_CODE = 'DUPLICATE_SHORT_CODE'
CONCURRENCY_LIMIT_EXCEEDED = 'CONCURRENCY_LIMIT_EXCEEDED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
