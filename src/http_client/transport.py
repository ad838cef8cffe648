"""Network transport built on requests."""

from __future__ import annotations

import logging
import ssl
import sys
from collections.abc import Mapping
from http.cookiejar import MozillaCookieJar
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import MaxRetryError
from urllib3.util import create_urllib3_context

from .encoding import RequestBody
from .exceptions import TransportError
from .options import TransportOption

logger = logging.getLogger(__name__)

_HTTP_VERSIONS = {9: "0.9", 10: "1.0", 11: "1.1", 20: "2"}


class _TlsAdapter(HTTPAdapter):
    """HTTPAdapter with a custom SSL context and/or host name checking turned off."""

    def __init__(
        self,
        ssl_context: Optional[ssl.SSLContext] = None,
        assert_hostname: Optional[bool] = None,
        **kwargs: Any,
    ) -> None:
        # HTTPAdapter.__init__ calls init_poolmanager, so set these first
        self._ssl_context = ssl_context
        self._assert_hostname = assert_hostname
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        if self._ssl_context is not None:
            kwargs["ssl_context"] = self._ssl_context
        if self._assert_hostname is not None:
            kwargs["assert_hostname"] = self._assert_hostname
        super().init_poolmanager(*args, **kwargs)


def build_headers(
    header_lines: list[str],
    body: Optional[RequestBody],
    accept_encoding: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> dict[str, Optional[str]]:
    """
    Convert raw header lines to a header mapping for requests.

    Repeated names are joined with ", ". A line with an empty value,
    e.g. "Accept:", removes that header from the request. Lines without
    a colon are ignored.

    Args:
        header_lines: Raw header lines
        body: Encoded body, whose content type is added unless a header sets one
        accept_encoding: Accept-Encoding to send unless a header sets one
        user_agent: User-Agent to send unless a header sets one

    Returns:
        Header mapping, None values mark removed headers
    """
    headers: dict[str, Optional[str]] = {}
    names: dict[str, str] = {}

    for line in header_lines:
        name, separator, value = line.partition(":")
        name = name.strip()
        if not separator or not name:
            logger.debug(f"Ignoring header line without name: {line!r}")
            continue

        value = value.strip()
        key = names.setdefault(name.lower(), name)
        existing = headers.get(key)
        if not value:
            headers[key] = None
        elif existing:
            headers[key] = f"{existing}, {value}"
        else:
            headers[key] = value

    defaults = {
        "content-type": ("Content-Type", body.content_type if body is not None else None),
        "accept-encoding": ("Accept-Encoding", accept_encoding),
        "user-agent": ("User-Agent", user_agent),
    }
    for lowered, (name, value) in defaults.items():
        if value and lowered not in names:
            headers[name] = value

    return headers


def _error_message(error: Exception) -> str:
    """Return the most specific message for a requests error."""
    reason: Any = error
    inner = error.args[0] if error.args else None
    if isinstance(inner, MaxRetryError) and inner.reason is not None:
        reason = inner.reason
    return str(reason)


class RequestsTransport:
    """
    Transport that performs the exchange with requests.

    Each perform() call opens its own session and closes it before
    returning. Cookies are loaded from and saved to Netscape format cookie
    files, so a cookie file can be shared by consecutive calls.

    The result is rebuilt as a raw HTTP/1.x message: status line, header
    lines, an empty line and the decoded body.

    Example:
        transport = RequestsTransport()
        raw = transport.perform({
            TransportOption.URL: "https://example.com/",
            TransportOption.METHOD: "GET",
        })
    """

    def __init__(
        self,
        session_factory: Callable[[], requests.Session] = requests.Session,
        output: Optional[BinaryIO] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            session_factory: Creates the session for one exchange
            output: Stream the body is written to when RETURN_TRANSFER is off
                (default: standard output)
        """
        self._session_factory = session_factory
        self._output = output

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
        url = options[TransportOption.URL]
        method = options.get(TransportOption.METHOD, "GET")
        body: Optional[RequestBody] = options.get(TransportOption.POST_FIELDS)

        headers = build_headers(
            list(options.get(TransportOption.HTTP_HEADERS, [])),
            body,
            accept_encoding=options.get(TransportOption.ACCEPT_ENCODING),
            user_agent=options.get(TransportOption.USER_AGENT),
        )

        verify_peer = bool(options.get(TransportOption.SSL_VERIFY_PEER, True))
        ca_info = options.get(TransportOption.CA_INFO)
        verify: bool | str = str(ca_info) if verify_peer and ca_info else verify_peer

        cert, ssl_context = self._client_certificate(options)
        assert_hostname = None
        if verify_peer and not options.get(TransportOption.SSL_VERIFY_HOST, True):
            assert_hostname = False

        proxy = options.get(TransportOption.PROXY)
        proxies = {"http": proxy, "https": proxy} if proxy else None
        timeout = (
            options.get(TransportOption.CONNECT_TIMEOUT),
            options.get(TransportOption.TIMEOUT),
        )

        jar = self._load_cookies(options.get(TransportOption.COOKIE_FILE))

        logger.debug(f"{method} {url}")
        try:
            with self._session_factory() as session:
                session.cookies = jar
                if ssl_context is not None or assert_hostname is not None:
                    session.mount("https://", _TlsAdapter(ssl_context=ssl_context, assert_hostname=assert_hostname))

                response = session.request(
                    method,
                    url,
                    headers=headers,
                    data=body.data if body is not None else None,
                    timeout=timeout,
                    verify=verify,
                    cert=cert,
                    proxies=proxies,
                    allow_redirects=bool(options.get(TransportOption.FOLLOW_LOCATION, False)),
                )
                content = response.content
        except requests.RequestException as e:
            raise TransportError(_error_message(e)) from e
        except OSError as e:
            raise TransportError(str(e)) from e
        except ValueError as e:
            # Header values http.client cannot encode, methods with non-token characters
            raise TransportError(str(e)) from e

        cookie_jar = options.get(TransportOption.COOKIE_JAR)
        if cookie_jar:
            jar.save(str(cookie_jar), ignore_discard=True, ignore_expires=True)

        return self._raw_result(response, content, options)

    def _client_certificate(
        self, options: Mapping[TransportOption, Any]
    ) -> tuple[Optional[str | tuple[str, str]], Optional[ssl.SSLContext]]:
        """
        Resolve client certificate options.

        Returns:
            (cert argument for requests, SSL context) - the context is only
            built for password protected certificates

        Raises:
            TransportError: For certificate types other than PEM or unreadable certificates
        """
        cert_type = options.get(TransportOption.SSL_CERT_TYPE)
        if cert_type is not None and str(cert_type).upper() != "PEM":
            raise TransportError(f"Unsupported client certificate type: {cert_type}")

        cert = options.get(TransportOption.SSL_CERT)
        key = options.get(TransportOption.SSL_KEY)
        password = options.get(TransportOption.SSL_CERT_PASSWORD)
        if not cert:
            return None, None

        if password is None:
            return ((str(cert), str(key)) if key else str(cert)), None

        context = create_urllib3_context()
        try:
            context.load_cert_chain(str(cert), str(key) if key else None, password)
        except OSError as e:
            raise TransportError(f"Could not load client certificate '{cert}': {e}") from e
        return None, context

    def _load_cookies(self, cookie_file: Optional[str]) -> MozillaCookieJar:
        jar = MozillaCookieJar()
        if not cookie_file:
            return jar

        path = Path(cookie_file)
        if not path.is_file() or path.stat().st_size == 0:
            return jar

        try:
            jar.load(str(path), ignore_discard=True, ignore_expires=True)
        except OSError as e:
            logger.warning(f"Ignoring unreadable cookie file {path}: {e}")
        return jar

    def _raw_result(
        self,
        response: requests.Response,
        content: bytes,
        options: Mapping[TransportOption, Any],
    ) -> bytes:
        """Rebuild the raw HTTP message returned by perform()."""
        result = b""

        if options.get(TransportOption.INCLUDE_HEADERS, True):
            version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "1.1")
            lines = [f"HTTP/{version} {response.status_code} {response.reason or ''}".rstrip()]
            raw_headers = response.raw.headers if response.raw is not None else response.headers
            for name, value in raw_headers.items():
                lines.append(f"{name}: {value}")
            result += ("\r\n".join(lines) + "\r\n\r\n").encode("iso-8859-1", errors="replace")

        if options.get(TransportOption.RETURN_TRANSFER, True):
            result += content
        else:
            output = self._output or sys.stdout.buffer
            output.write(content)
            output.flush()

        return result
