"""Fake HTTP client for tests."""

from __future__ import annotations

from typing import Optional

from .models.request import HttpClientRequest
from .models.response import HttpClientResponse
from .protocols import ResponseHandler


class FakeHttpClient:
    """
    Test double for HttpClient that never touches the network.

    Without a response handler every request gets a 200 response with
    empty content. With one, send() returns whatever the handler returns.

    Example:
        client = FakeHttpClient(lambda request: HttpClientResponse(404, "Not found"))
        service = MyService(client)
    """

    def __init__(self, response_handler: Optional[ResponseHandler] = None) -> None:
        self._response_handler = response_handler

    def set_response_handler(self, response_handler: ResponseHandler) -> FakeHttpClient:
        """
        Set the function that builds responses.

        Args:
            response_handler: Called as response_handler(request), must return an HttpClientResponse

        Returns:
            The client itself
        """
        self._response_handler = response_handler
        return self

    def send(self, request: HttpClientRequest) -> HttpClientResponse:
        if self._response_handler is None:
            return HttpClientResponse()

        return self._response_handler(request)
