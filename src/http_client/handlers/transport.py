"""Request handler that runs requests through a Transport."""

from __future__ import annotations

import logging
import os
import tempfile
import warnings
import weakref
from types import TracebackType
from typing import Any, Optional, Union

from ..encoding import encode_body
from ..exceptions import BodyEncodingError, ResponseParseError, TransportError, UnsafeOptionWarning
from ..models.config import HandlerConfig
from ..models.request import HttpClientRequest
from ..models.response import HttpClientResponse
from ..options import MANAGED_OPTIONS, TransportOption
from ..parser import parse_response
from ..protocols import Transport
from ..transport import RequestsTransport

logger = logging.getLogger(__name__)


def _remove_file(path: str) -> None:
    if os.path.exists(path):
        os.unlink(path)


class TransportRequestHandler:
    """
    Default request handler of HttpClient.

    For every request the handler builds a transport option mapping in
    fixed layers:

    1. Required options (URL, method, headers, cookie files, timeouts, TLS)
    2. The encoded body
    3. Certificates and keys set on the request
    4. Overrides registered with set_option()

    then runs the transport and parses its raw result. Transport failures
    and malformed results become responses with http code 0.

    Cookies are kept in a temporary file created with the handler and
    removed by close(), so cookies persist across requests sent through
    one handler. A handler must not be used from several threads at once.

    Example:
        with TransportRequestHandler() as handler:
            handler.set_option(TransportOption.TIMEOUT, 60)
            client = HttpClient(handler)
            response = client.send(HttpClientRequest("https://example.com/"))
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[HandlerConfig] = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            transport: Transport to use (default: RequestsTransport)
            config: Handler defaults (default: HandlerConfig())
        """
        self._transport = transport if transport is not None else RequestsTransport()
        self._config = config or HandlerConfig()
        self._options: dict[TransportOption, Any] = {}

        fd, self._cookie_file = tempfile.mkstemp(prefix=self._config.cookie_file_prefix)
        os.close(fd)
        self._finalizer = weakref.finalize(self, _remove_file, self._cookie_file)

    @property
    def cookie_file(self) -> str:
        """Path of the cookie file shared by all requests of this handler."""
        return self._cookie_file

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @property
    def options(self) -> dict[TransportOption, Any]:
        """Overrides registered with set_option()."""
        return dict(self._options)

    def set_option(self, option: Union[TransportOption, str], value: Any) -> TransportRequestHandler:
        """
        Register a transport option override applied to every request.

        Overrides are applied after the options the handler sets itself.
        Overriding an option the handler manages emits an UnsafeOptionWarning,
        but the override is still used.

        Args:
            option: The option, as TransportOption or its string value
            value: The option value

        Returns:
            The handler itself

        Raises:
            ValueError: If the option is unknown
        """
        option = TransportOption(option)
        if option in MANAGED_OPTIONS:
            warnings.warn(
                f'Option "{option.name}" is used internally by {type(self).__name__}. '
                "Setting it manually may lead to unexpected results.",
                UnsafeOptionWarning,
                stacklevel=2,
            )

        self._options[option] = value
        return self

    def build_options(self, request: HttpClientRequest) -> dict[TransportOption, Any]:
        """
        Build the transport options for a request.

        Args:
            request: The request

        Returns:
            Option mapping passed to the transport

        Raises:
            BodyEncodingError: If a file to upload cannot be read
        """
        config = self._config
        options: dict[TransportOption, Any] = {
            TransportOption.URL: request.url,
            TransportOption.METHOD: request.method,
            TransportOption.HTTP_HEADERS: request.headers,
            TransportOption.INCLUDE_HEADERS: True,
            TransportOption.RETURN_TRANSFER: True,
            TransportOption.FOLLOW_LOCATION: config.follow_redirects,
            TransportOption.SSL_VERIFY_PEER: config.verify_peer,
            TransportOption.SSL_VERIFY_HOST: config.verify_host,
            TransportOption.CONNECT_TIMEOUT: config.connect_timeout,
            TransportOption.COOKIE_FILE: self._cookie_file,
            TransportOption.COOKIE_JAR: self._cookie_file,
            TransportOption.ACCEPT_ENCODING: config.accept_encoding,
            TransportOption.POST_FIELDS: encode_body(request),
        }

        if request.ca_certificate is not None:
            options[TransportOption.CA_INFO] = str(request.ca_certificate)
        if request.client_certificate is not None:
            options[TransportOption.SSL_CERT] = str(request.client_certificate)
        if request.client_certificate_password is not None:
            options[TransportOption.SSL_CERT_PASSWORD] = request.client_certificate_password
        if request.client_certificate_type is not None:
            options[TransportOption.SSL_CERT_TYPE] = request.client_certificate_type
        if request.client_key is not None:
            options[TransportOption.SSL_KEY] = str(request.client_key)

        options.update(self._options)
        return options

    def handle_request(self, request: HttpClientRequest) -> HttpClientResponse:
        """
        Handle a request.

        Args:
            request: The request

        Returns:
            The parsed response, or a response with http code 0 and the
            error message as content if no valid response was received
        """
        try:
            options = self.build_options(request)
        except BodyEncodingError as e:
            logger.warning(f"{request.method} {request.url} failed: {e}")
            return HttpClientResponse(0, str(e))

        try:
            raw = self._transport.perform(options)
        except TransportError as e:
            logger.warning(f"{request.method} {request.url} failed: {e}")
            return HttpClientResponse(0, str(e))

        try:
            response = parse_response(raw, self._config.max_interim_responses)
        except ResponseParseError as e:
            logger.warning(f"Malformed response for {request.method} {request.url}: {e}")
            return HttpClientResponse(0, f"Malformed response: {e}")

        logger.debug(f"{request.method} {request.url} -> {response.http_code}")
        return response

    def close(self) -> None:
        """Remove the cookie file. Safe to call more than once."""
        self._finalizer()

    def __enter__(self) -> TransportRequestHandler:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
