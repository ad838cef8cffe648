"""
http_client - A small HTTP client with a pluggable request handler.

Usage:
    from http_client import HttpClient, HttpClientRequest

    with HttpClient() as client:
        request = HttpClientRequest("https://example.com/api", "PUT")
        request.add_header("Content-Type: application/json")
        request.set_raw_content('{"name": "value"}')

        response = client.send(request)
        print(response.http_code, response.content)

Tests can replace HttpClient with FakeHttpClient:

    client = FakeHttpClient(lambda request: HttpClientResponse(200, "ok"))
"""

__version__ = "1.0.0"

from .client import HttpClient
from .encoding import RequestBody, encode_body
from .exceptions import (
    BodyEncodingError,
    HttpClientError,
    InvalidUrlError,
    ResponseParseError,
    TransportError,
    UnsafeOptionWarning,
)
from .fake import FakeHttpClient
from .handlers import TransportRequestHandler
from .logging_config import setup_logging
from .models import HandlerConfig, HttpClientRequest, HttpClientResponse
from .options import MANAGED_OPTIONS, TransportOption
from .parser import parse_response
from .protocols import HttpClientInterface, RequestHandler, ResponseHandler, Transport
from .transport import RequestsTransport

__all__ = [
    "__version__",
    # Clients
    "HttpClient",
    "FakeHttpClient",
    "HttpClientInterface",
    # Models
    "HttpClientRequest",
    "HttpClientResponse",
    "HandlerConfig",
    # Handlers and transports
    "RequestHandler",
    "ResponseHandler",
    "TransportRequestHandler",
    "Transport",
    "RequestsTransport",
    "TransportOption",
    "MANAGED_OPTIONS",
    # Encoding and parsing
    "RequestBody",
    "encode_body",
    "parse_response",
    # Errors
    "HttpClientError",
    "TransportError",
    "ResponseParseError",
    "BodyEncodingError",
    "InvalidUrlError",
    "UnsafeOptionWarning",
    # Logging
    "setup_logging",
]
