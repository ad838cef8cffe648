"""HTTP client request."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit

from ..exceptions import InvalidUrlError
from ..url_validator import UrlValidator

PathLike = Union[str, Path]

_DEFAULT_PORTS = {"http": 80, "https": 443}

_url_validator = UrlValidator()


class HttpClientRequest:
    """
    An outbound HTTP request.

    The body is either raw content or a set of post fields and files,
    never both: setting raw content clears fields and files, and setting
    a field or a file clears raw content.

    All mutators return the request itself so calls can be chained.

    Example:
        request = (
            HttpClientRequest("https://example.com/upload", "POST")
            .add_header("X-Token: abc")
            .set_post_field("title", "Report")
            .set_file("report", Path("report.pdf"))
        )
    """

    def __init__(self, url: str, method: str = "GET") -> None:
        """
        Initialize the request.

        Args:
            url: Absolute http or https URL
            method: Request method

        Raises:
            InvalidUrlError: If the URL is not an absolute http(s) URL
        """
        result = _url_validator.validate(url)
        if not result.is_valid:
            raise InvalidUrlError(f"Invalid url '{url}': {result.rejection_reason}")

        self._url = url
        self._method = method
        self._headers: list[str] = []
        self._post_fields: dict[str, str] = {}
        self._files: dict[str, Path] = {}
        self._raw_content = ""
        self._ca_certificate: Optional[Path] = None
        self._client_certificate: Optional[Path] = None
        self._client_certificate_password: Optional[str] = None
        self._client_certificate_type: Optional[str] = None
        self._client_key: Optional[Path] = None

    def __repr__(self) -> str:
        return f"HttpClientRequest({self._url!r}, {self._method!r})"

    @property
    def url(self) -> str:
        return self._url

    @property
    def host(self) -> str:
        return urlsplit(self._url).hostname or ""

    @property
    def port(self) -> int:
        """Explicit port of the URL, or the default port of its scheme."""
        parts = urlsplit(self._url)
        if parts.port is not None:
            return parts.port
        return _DEFAULT_PORTS[parts.scheme.lower()]

    @property
    def path(self) -> str:
        return urlsplit(self._url).path or "/"

    @property
    def query(self) -> str:
        return urlsplit(self._url).query

    @property
    def method(self) -> str:
        return self._method

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    @property
    def post_fields(self) -> dict[str, str]:
        return dict(self._post_fields)

    @property
    def files(self) -> dict[str, Path]:
        return dict(self._files)

    @property
    def raw_content(self) -> str:
        return self._raw_content

    @property
    def ca_certificate(self) -> Optional[Path]:
        return self._ca_certificate

    @property
    def client_certificate(self) -> Optional[Path]:
        return self._client_certificate

    @property
    def client_certificate_password(self) -> Optional[str]:
        return self._client_certificate_password

    @property
    def client_certificate_type(self) -> Optional[str]:
        return self._client_certificate_type

    @property
    def client_key(self) -> Optional[Path]:
        return self._client_key

    def add_header(self, header: str) -> HttpClientRequest:
        """
        Add a raw header line, e.g. "Content-Type: application/json".

        Duplicates are kept in the order they were added.
        """
        self._headers.append(header)
        return self

    def set_post_field(self, name: str, value: str) -> HttpClientRequest:
        self._raw_content = ""
        self._post_fields[name] = value
        return self

    def set_file(self, name: str, file_path: PathLike) -> HttpClientRequest:
        """
        Set a file to upload as a multipart part called ``name``.

        Args:
            name: Form field name of the part
            file_path: Path of the file to upload
        """
        self._raw_content = ""
        self._files[name] = Path(file_path)
        return self

    def set_raw_content(self, raw_content: str) -> HttpClientRequest:
        """Set the exact request body. Clears any post fields and files."""
        self._post_fields = {}
        self._files = {}
        self._raw_content = raw_content
        return self

    def set_ca_certificate(self, ca_certificate: PathLike) -> HttpClientRequest:
        self._ca_certificate = Path(ca_certificate)
        return self

    def set_client_certificate(self, client_certificate: PathLike) -> HttpClientRequest:
        self._client_certificate = Path(client_certificate)
        return self

    def set_client_certificate_password(self, password: str) -> HttpClientRequest:
        self._client_certificate_password = password
        return self

    def set_client_certificate_type(self, certificate_type: str) -> HttpClientRequest:
        """Set the client certificate type, e.g. "PEM"."""
        self._client_certificate_type = certificate_type
        return self

    def set_client_key(self, client_key: PathLike) -> HttpClientRequest:
        self._client_key = Path(client_key)
        return self
