"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .retry import RetryPolicy, classify_http_error
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
    "RetryPolicy",
    "classify_http_error",
]
