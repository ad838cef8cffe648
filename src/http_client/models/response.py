"""HTTP client response."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class HttpClientResponse:
    """
    Outcome of sending a request.

    An http_code of 0 means no usable HTTP response was received, in which
    case content holds a diagnostic message.

    Attributes:
        http_code: HTTP status code (200, 404, etc.)
        content: Response body decoded as text
        raw_content: Undecoded response body
        headers: Raw header lines, e.g. "Content-Type: text/html"
    """

    http_code: int = 200
    content: str = ""
    raw_content: Optional[bytes] = None
    headers: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.raw_content is None:
            self.raw_content = self.content.encode("utf-8")

    def add_header(self, header: str) -> None:
        self.headers.append(header)

    def get_header(self, name: str) -> Optional[str]:
        """
        Return the value of the first header called ``name``.

        Args:
            name: Header name, matched case-insensitively

        Returns:
            Header value with surrounding whitespace removed, or None
        """
        wanted = name.strip().lower()
        for header in self.headers:
            header_name, separator, value = header.partition(":")
            if separator and header_name.strip().lower() == wanted:
                return value.strip()
        return None

    def is_successful(self) -> bool:
        return 200 <= self.http_code < 300
