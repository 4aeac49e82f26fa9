"""Gemini client configuration.

Endpoint, model and retry parameters for the generateContent REST call.
These are fixed; the per-task sampling parameters live in user settings.
"""

# =============================================================================
# Endpoint
# =============================================================================
# The model id is not user-configurable. Requests go to
# {GEMINI_BASE_URL}/{GEMINI_MODEL}:generateContent?key=<api key>.

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_MODEL = "gemini-2.5-flash-lite"

# =============================================================================
# Timeouts and Retries
# =============================================================================
# Only rate-limit failures (HTTP 429 / RESOURCE_EXHAUSTED) are retried.
# The delay before retry n (0-based) is INITIAL_RETRY_DELAY * 2**n seconds,
# so a fully rate-limited call makes MAX_RETRIES + 1 requests.

REQUEST_TIMEOUT = 30.0
MAX_RETRIES = 3
INITIAL_RETRY_DELAY = 2.0

RATE_LIMIT_CODE = 429
RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"
