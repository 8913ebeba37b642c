"""REST runtime abstractions."""

from .endpoint import Endpoint
from .http_client import HTTPClient
from .transport import RESTTransport, check_status, decode

__all__ = [
    "Endpoint",
    "HTTPClient",
    "RESTTransport",
    "check_status",
    "decode",
]
