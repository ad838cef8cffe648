"""HTTP client."""

from __future__ import annotations

from types import TracebackType
from typing import Optional

from .handlers.transport import TransportRequestHandler
from .models.request import HttpClientRequest
from .models.response import HttpClientResponse
from .protocols import RequestHandler


class HttpClient:
    """
    HTTP client that delegates requests to a request handler.

    Without an explicit handler a TransportRequestHandler backed by
    requests is used. With that handler send() does not raise for
    network problems: check http_code or is_successful() instead.

    Example:
        with HttpClient() as client:
            request = HttpClientRequest("https://example.com/", "POST")
            request.set_post_field("name", "value")
            response = client.send(request)
            if response.is_successful():
                print(response.content)
    """

    def __init__(self, request_handler: Optional[RequestHandler] = None) -> None:
        """
        Initialize the client.

        Args:
            request_handler: Handler that turns requests into responses
        """
        self._request_handler: RequestHandler = (
            request_handler if request_handler is not None else TransportRequestHandler()
        )

    @property
    def request_handler(self) -> RequestHandler:
        return self._request_handler

    def send(self, request: HttpClientRequest) -> HttpClientResponse:
        """
        Send a request.

        Args:
            request: The request

        Returns:
            The response
        """
        return self._request_handler.handle_request(request)

    def close(self) -> None:
        """Close the request handler, if it can be closed."""
        close = getattr(self._request_handler, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
