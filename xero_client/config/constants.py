"""Constants shared across the client."""

# Request timeout applied to every call (5.5 minutes)
DEFAULT_TIMEOUT_SECONDS = 330.0

DEFAULT_BASE_URL = "https://api.xero.com"
DEFAULT_ACCEPT = "application/json"
DEFAULT_WRITE_CONTENT_TYPE = "application/xml"
DEFAULT_ACCEPT_ENCODING = "gzip, deflate"

USER_AGENT_PREFIX = "Xero Api wrapper"

# A 503 whose body carries this marker was rejected for exceeding the rate limit
RATE_LIMIT_MARKER = "oauth_problem"
RATE_EXCEEDED_CODE = "RateExceeded"
