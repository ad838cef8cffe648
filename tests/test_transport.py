"""Tests for RequestsTransport."""

import io
import logging
from http.cookiejar import MozillaCookieJar
from unittest.mock import MagicMock

import pytest
import requests
from http_client import RequestBody, RequestsTransport, TransportError, TransportOption
from http_client.transport import build_headers
from requests.cookies import create_cookie
from urllib3.exceptions import MaxRetryError


def make_response(status=200, reason="OK", headers=None, content=b"Hello World!", version=11):
    """Create a mock requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.reason = reason
    response.content = content
    response.raw.version = version
    response.raw.headers = headers if headers is not None else {}
    return response


def make_session(response=None, error=None):
    """Create a mock requests.Session usable as a context manager."""
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response if response is not None else make_response()
    return session


def base_options(extra=None):
    options = {
        TransportOption.URL: "https://example.com/",
        TransportOption.METHOD: "GET",
        TransportOption.HTTP_HEADERS: [],
        TransportOption.CONNECT_TIMEOUT: 30,
    }
    options.update(extra or {})
    return options


class TestPerform:
    """Tests for RequestsTransport.perform."""

    def test_raw_result(self):
        session = make_session(make_response(headers={"Content-Type": "text/plain", "X-Foo": "Bar"}))
        transport = RequestsTransport(session_factory=lambda: session)

        raw = transport.perform(base_options())

        assert raw == b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\nX-Foo: Bar\r\n\r\nHello World!"

    def test_http_10_status_line(self):
        session = make_session(make_response(status=404, reason="Not Found", content=b"", version=10))
        transport = RequestsTransport(session_factory=lambda: session)

        assert transport.perform(base_options()) == b"HTTP/1.0 404 Not Found\r\n\r\n"

    def test_request_arguments(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(
            base_options(
                {
                    TransportOption.METHOD: "POST",
                    TransportOption.HTTP_HEADERS: ["X-Foo: Bar"],
                    TransportOption.POST_FIELDS: RequestBody(
                        data=b"Foo=Bar", content_type="application/x-www-form-urlencoded"
                    ),
                }
            )
        )

        session.request.assert_called_once_with(
            "POST",
            "https://example.com/",
            headers={"X-Foo": "Bar", "Content-Type": "application/x-www-form-urlencoded"},
            data=b"Foo=Bar",
            timeout=(30, None),
            verify=True,
            cert=None,
            proxies=None,
            allow_redirects=False,
        )
        session.mount.assert_not_called()

    def test_timeout_proxy_and_redirects(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(
            base_options(
                {
                    TransportOption.TIMEOUT: 123,
                    TransportOption.PROXY: "http://proxy:8080",
                    TransportOption.FOLLOW_LOCATION: True,
                }
            )
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["timeout"] == (30, 123)
        assert kwargs["proxies"] == {"http": "http://proxy:8080", "https": "http://proxy:8080"}
        assert kwargs["allow_redirects"] is True

    def test_ca_certificate(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(base_options({TransportOption.CA_INFO: "/certs/cacert.pem"}))

        assert session.request.call_args.kwargs["verify"] == "/certs/cacert.pem"

    def test_verification_disabled(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(
            base_options({TransportOption.SSL_VERIFY_PEER: False, TransportOption.CA_INFO: "/certs/cacert.pem"})
        )

        assert session.request.call_args.kwargs["verify"] is False

    def test_host_verification_disabled(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(base_options({TransportOption.SSL_VERIFY_HOST: False}))

        session.mount.assert_called_once()
        assert session.mount.call_args.args[0] == "https://"

    def test_client_certificate_and_key(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(
            base_options(
                {
                    TransportOption.SSL_CERT: "/certs/cert.pem",
                    TransportOption.SSL_KEY: "/certs/key.pem",
                    TransportOption.SSL_CERT_TYPE: "pem",
                }
            )
        )

        assert session.request.call_args.kwargs["cert"] == ("/certs/cert.pem", "/certs/key.pem")

    def test_client_certificate_only(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        transport.perform(base_options({TransportOption.SSL_CERT: "/certs/cert.pem"}))

        assert session.request.call_args.kwargs["cert"] == "/certs/cert.pem"

    def test_unsupported_certificate_type(self):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        with pytest.raises(TransportError, match="Unsupported client certificate type: DER"):
            transport.perform(
                base_options({TransportOption.SSL_CERT: "/certs/cert.der", TransportOption.SSL_CERT_TYPE: "DER"})
            )

        session.request.assert_not_called()

    def test_unreadable_password_protected_certificate(self, files_dir):
        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)

        with pytest.raises(TransportError, match="Could not load client certificate"):
            transport.perform(
                base_options(
                    {
                        TransportOption.SSL_CERT: str(files_dir / "cert.pem"),
                        TransportOption.SSL_KEY: str(files_dir / "key.pem"),
                        TransportOption.SSL_CERT_PASSWORD: "FooBar",
                    }
                )
            )

    def test_connection_error(self):
        error = requests.ConnectionError(MaxRetryError(None, "/", ConnectionRefusedError("Connection refused")))
        transport = RequestsTransport(session_factory=lambda: make_session(error=error))

        with pytest.raises(TransportError, match="^Connection refused$"):
            transport.perform(base_options())

    def test_timeout_error(self):
        transport = RequestsTransport(session_factory=lambda: make_session(error=requests.Timeout("timed out")))

        with pytest.raises(TransportError, match="timed out"):
            transport.perform(base_options())

    def test_os_error(self):
        error = OSError("Could not find a suitable TLS CA certificate bundle")
        transport = RequestsTransport(session_factory=lambda: make_session(error=error))

        with pytest.raises(TransportError, match="CA certificate bundle"):
            transport.perform(base_options())

    def test_unencodable_header_value(self):
        """Test that a header value http.client cannot encode becomes a TransportError."""
        error = UnicodeEncodeError("latin-1", "日本", 0, 2, "ordinal not in range(256)")
        transport = RequestsTransport(session_factory=lambda: make_session(error=error))

        with pytest.raises(TransportError, match="latin-1"):
            transport.perform(base_options({TransportOption.HTTP_HEADERS: ["X-Name: 日本"]}))

    def test_invalid_method(self):
        error = ValueError("Method cannot contain non-token characters 'GE T'")
        transport = RequestsTransport(session_factory=lambda: make_session(error=error))

        with pytest.raises(TransportError, match="non-token characters"):
            transport.perform(base_options({TransportOption.METHOD: "GE T"}))

    def test_without_headers(self):
        session = make_session(make_response(headers={"X-Foo": "Bar"}))
        transport = RequestsTransport(session_factory=lambda: session)

        assert transport.perform(base_options({TransportOption.INCLUDE_HEADERS: False})) == b"Hello World!"

    def test_without_return_transfer(self):
        session = make_session()
        output = io.BytesIO()
        transport = RequestsTransport(session_factory=lambda: session, output=output)

        raw = transport.perform(base_options({TransportOption.RETURN_TRANSFER: False}))

        assert raw == b"HTTP/1.1 200 OK\r\n\r\n"
        assert output.getvalue() == b"Hello World!"


class TestCookies:
    """Tests for cookie file handling."""

    def test_cookies_loaded_and_saved(self, tmp_path):
        cookie_file = tmp_path / "cookies.txt"
        jar = MozillaCookieJar()
        jar.set_cookie(create_cookie("Foo", "Bar", domain="example.com", rest={}))
        jar.save(str(cookie_file), ignore_discard=True, ignore_expires=True)

        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)
        transport.perform(
            base_options({TransportOption.COOKIE_FILE: str(cookie_file), TransportOption.COOKIE_JAR: str(cookie_file)})
        )

        assert [cookie.name for cookie in session.cookies] == ["Foo"]
        assert "Foo\tBar" in cookie_file.read_text()

    def test_empty_cookie_file(self, tmp_path):
        cookie_file = tmp_path / "cookies.txt"
        cookie_file.touch()

        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)
        transport.perform(
            base_options({TransportOption.COOKIE_FILE: str(cookie_file), TransportOption.COOKIE_JAR: str(cookie_file)})
        )

        assert list(session.cookies) == []
        assert cookie_file.read_text().startswith("# Netscape HTTP Cookie File")

    def test_unreadable_cookie_file(self, tmp_path, caplog):
        cookie_file = tmp_path / "cookies.txt"
        cookie_file.write_text("garbage")

        session = make_session()
        transport = RequestsTransport(session_factory=lambda: session)
        with caplog.at_level(logging.WARNING, logger="http_client"):
            transport.perform(base_options({TransportOption.COOKIE_FILE: str(cookie_file)}))

        assert list(session.cookies) == []
        assert "Ignoring unreadable cookie file" in caplog.text

    def test_cookie_jar_not_saved_on_failure(self, tmp_path):
        cookie_file = tmp_path / "cookies.txt"
        transport = RequestsTransport(session_factory=lambda: make_session(error=requests.Timeout("timed out")))

        with pytest.raises(TransportError):
            transport.perform(base_options({TransportOption.COOKIE_JAR: str(cookie_file)}))

        assert not cookie_file.exists()


class TestBuildHeaders:
    """Tests for build_headers."""

    def test_plain_headers(self):
        assert build_headers(["X-Foo: Bar", "Accept:  text/html "], None) == {"X-Foo": "Bar", "Accept": "text/html"}

    def test_duplicates_joined(self):
        assert build_headers(["X-Foo: 1", "x-foo: 2"], None) == {"X-Foo": "1, 2"}

    def test_empty_value_removes_header(self):
        assert build_headers(["Accept:"], None) == {"Accept": None}

    def test_line_without_colon_ignored(self):
        assert build_headers(["Bogus", ": no name", "X-Foo: Bar"], None) == {"X-Foo": "Bar"}

    def test_value_with_colon(self):
        assert build_headers(["Referer: https://example.com/"], None) == {"Referer": "https://example.com/"}

    def test_body_content_type_added(self):
        body = RequestBody(data=b"Foo=Bar", content_type="application/x-www-form-urlencoded")

        assert build_headers([], body) == {"Content-Type": "application/x-www-form-urlencoded"}

    def test_caller_content_type_wins(self):
        body = RequestBody(data=b"Foo=Bar", content_type="application/x-www-form-urlencoded")

        assert build_headers(["content-type: text/plain"], body) == {"content-type": "text/plain"}

    def test_raw_body_without_content_type(self):
        assert build_headers([], RequestBody(data=b"{}")) == {}

    def test_accept_encoding_and_user_agent(self):
        headers = build_headers(["User-Agent: custom"], None, accept_encoding="gzip", user_agent="http-client/1.0")

        assert headers == {"User-Agent": "custom", "Accept-Encoding": "gzip"}

    def test_empty_accept_encoding_leaves_default(self):
        assert build_headers([], None, accept_encoding="") == {}
