"""Constants used throughout the notification preference service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # Log requests slower than 1 second

# Security Headers
SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

# Dispatch
TIMEOUT_FAILURE_REASON = "Timeout"
DEFAULT_CHANNEL_SEND_TIMEOUT_SECONDS = 10.0

# Metadata bounds for notification send requests
METADATA_MAX_ENTRIES = 20
METADATA_MAX_KEY_LENGTH = 64
METADATA_MAX_STRING_LENGTH = 1024
METADATA_KEY_PATTERN = r"^[A-Za-z0-9_.\-]+$"
