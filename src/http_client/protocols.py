"""Protocol definitions for the HTTP client abstraction."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Protocol

from .models.request import HttpClientRequest
from .models.response import HttpClientResponse
from .options import TransportOption

# Builds a response for a request, used by FakeHttpClient
ResponseHandler = Callable[[HttpClientRequest], HttpClientResponse]


class HttpClientInterface(Protocol):
    """
    Protocol for HTTP clients.

    Code that depends on this protocol can be handed an HttpClient in
    production and a FakeHttpClient in tests.
    """

    def send(self, request: HttpClientRequest) -> HttpClientResponse:
        """
        Send a request.

        Args:
            request: The request to send

        Returns:
            The response
        """
        ...


class RequestHandler(Protocol):
    """
    Protocol for the strategy an HttpClient uses to turn a request into a response.

    Implementations report connection problems as a response with
    http code 0 rather than raising.
    """

    def handle_request(self, request: HttpClientRequest) -> HttpClientResponse:
        """
        Handle a request.

        Args:
            request: The request

        Returns:
            The response
        """
        ...


class Transport(Protocol):
    """
    Protocol for the component that performs the network exchange.

    A transport receives the complete option mapping for one request and
    returns the raw result: the status line and headers of every response
    block followed by the body, as an HTTP/1.x byte string.
    """

    def perform(self, options: Mapping[TransportOption, Any]) -> bytes:
        """
        Perform one exchange.

        Args:
            options: Transport options for the request

        Returns:
            Raw response bytes

        Raises:
            TransportError: If the exchange could not be completed
        """
        ...
