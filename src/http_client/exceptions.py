"""Exception and warning types for http_client."""


class HttpClientError(Exception):
    """Base class for all http_client errors."""


class TransportError(HttpClientError):
    """
    The transport could not complete the exchange.

    Raised by transports for DNS, connect and TLS failures. The request
    handler turns it into a response with http code 0, so it never
    reaches callers of HttpClient.send().
    """


class ResponseParseError(HttpClientError):
    """The raw result returned by a transport is not a valid HTTP/1.x message."""


class BodyEncodingError(HttpClientError):
    """The request body could not be built, e.g. a file to upload is unreadable."""


class InvalidUrlError(HttpClientError, ValueError):
    """The URL given to a request is not an absolute http(s) URL."""


class UnsafeOptionWarning(UserWarning):
    """A caller overrides a transport option the request handler manages itself."""
