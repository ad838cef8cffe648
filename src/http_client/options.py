"""Transport option keys."""

from enum import Enum


class TransportOption(str, Enum):
    """
    Keys of the option mapping a request handler passes to a transport.

    Values:
        URL: Target URL (str)
        METHOD: Request method (str)
        HTTP_HEADERS: Raw request header lines (list[str])
        POST_FIELDS: Encoded request body (RequestBody or None)
        COOKIE_FILE: File cookies are read from (str)
        COOKIE_JAR: File cookies are written to (str)
        INCLUDE_HEADERS: Include the status line and headers in the result (bool)
        RETURN_TRANSFER: Return the body instead of writing it to stdout (bool)
        FOLLOW_LOCATION: Follow redirects (bool)
        SSL_VERIFY_PEER: Verify the server certificate (bool)
        SSL_VERIFY_HOST: Verify the certificate host name (bool)
        CONNECT_TIMEOUT: Connection timeout in seconds (float)
        TIMEOUT: Read timeout in seconds (float or None)
        ACCEPT_ENCODING: Accept-Encoding value, "" for all supported (str)
        CA_INFO: CA certificate bundle path (str)
        SSL_CERT: Client certificate path (str)
        SSL_CERT_PASSWORD: Client certificate password (str)
        SSL_CERT_TYPE: Client certificate type, e.g. "PEM" (str)
        SSL_KEY: Client key path (str)
        PROXY: Proxy URL (str)
        USER_AGENT: User-Agent header value (str)
    """

    URL = "url"
    METHOD = "method"
    HTTP_HEADERS = "http_headers"
    POST_FIELDS = "post_fields"
    COOKIE_FILE = "cookie_file"
    COOKIE_JAR = "cookie_jar"
    INCLUDE_HEADERS = "include_headers"
    RETURN_TRANSFER = "return_transfer"
    FOLLOW_LOCATION = "follow_location"
    SSL_VERIFY_PEER = "ssl_verify_peer"
    SSL_VERIFY_HOST = "ssl_verify_host"
    CONNECT_TIMEOUT = "connect_timeout"
    TIMEOUT = "timeout"
    ACCEPT_ENCODING = "accept_encoding"
    CA_INFO = "ca_info"
    SSL_CERT = "ssl_cert"
    SSL_CERT_PASSWORD = "ssl_cert_password"
    SSL_CERT_TYPE = "ssl_cert_type"
    SSL_KEY = "ssl_key"
    PROXY = "proxy"
    USER_AGENT = "user_agent"


# Options the request handler sets itself on every request
MANAGED_OPTIONS = frozenset(
    {
        TransportOption.URL,
        TransportOption.METHOD,
        TransportOption.HTTP_HEADERS,
        TransportOption.POST_FIELDS,
        TransportOption.COOKIE_FILE,
        TransportOption.COOKIE_JAR,
        TransportOption.INCLUDE_HEADERS,
        TransportOption.RETURN_TRANSFER,
        TransportOption.CA_INFO,
        TransportOption.SSL_CERT,
        TransportOption.SSL_CERT_PASSWORD,
        TransportOption.SSL_CERT_TYPE,
        TransportOption.SSL_KEY,
    }
)
