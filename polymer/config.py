"""Library-wide constants.

Per-resource settings live on descriptor subclasses; these values are the
defaults shared by every endpoint and the bundled HTTP transport.
"""

from __future__ import annotations

# Domain carried by errors the library synthesizes itself
ERROR_DOMAIN = "com.polymer.errordomain"
DEFAULT_ERROR_CODE = 1

# HTTP transport defaults
DEFAULT_TIMEOUT = 30.0
RATE_LIMIT_STATUSES = frozenset({418, 429})
DEFAULT_RETRY_AFTER = 1.0
MAX_RATE_LIMIT_ATTEMPTS = 5

# Keys used when response headers are appended to the decoded body
HEADER_KEY = "Header"
RESPONSE_KEY = "Response"
