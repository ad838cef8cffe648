"""Parsing of raw HTTP/1.x transport results."""

from __future__ import annotations

import logging
from typing import Optional

from charset_normalizer import from_bytes as detect_encoding

from .exceptions import ResponseParseError
from .models.response import HttpClientResponse

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
HEADER_TERMINATOR = b"\r\n\r\n"
CONTINUE = 100
DEFAULT_MAX_INTERIM_RESPONSES = 10


def parse_status_line(status_line: str) -> int:
    """
    Extract the status code from a status line like "HTTP/1.1 200 OK".

    Args:
        status_line: The status line, reason phrase optional

    Returns:
        The status code

    Raises:
        ResponseParseError: If the line is not an HTTP/1.x status line
    """
    parts = status_line.split(" ", 2)
    if len(parts) < 2 or not parts[0].startswith("HTTP/"):
        raise ResponseParseError(f"Invalid status line: {status_line!r}")

    code = parts[1]
    if len(code) != 3 or not code.isdigit():
        raise ResponseParseError(f"Invalid status code in status line: {status_line!r}")

    return int(code)


def decode_body(body: bytes, content_type: Optional[str]) -> str:
    """
    Decode a response body to text.

    Fallback chain:
    1. Content-Type header charset
    2. UTF-8
    3. charset-normalizer detection
    4. UTF-8 with replacement

    Args:
        body: Raw body bytes
        content_type: Content-Type header value, if any

    Returns:
        Decoded string
    """
    if not body:
        return ""

    encoding = None
    if content_type:
        for part in content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

    if encoding:
        try:
            return body.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with declared encoding: {encoding}")

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best_match = detect_encoding(body).best()
    if best_match is not None:
        logger.debug(f"Detected encoding: {best_match.encoding}")
        return str(best_match)

    return body.decode("utf-8", errors="replace")


def parse_response(
    raw: bytes,
    max_interim_responses: int = DEFAULT_MAX_INTERIM_RESPONSES,
) -> HttpClientResponse:
    """
    Parse a raw transport result into a response.

    The raw result is one or more header blocks, each terminated by an
    empty line, followed by the body. Blocks with status 100 (Continue)
    precede the real response and are skipped.

    Args:
        raw: Raw response bytes
        max_interim_responses: Maximum number of 100 Continue blocks to skip

    Returns:
        HttpClientResponse with code, headers and body

    Raises:
        ResponseParseError: If the input has no valid status line or
            contains too many interim responses
    """
    remainder = raw
    skipped = 0

    while True:
        header_block, _, remainder = remainder.partition(HEADER_TERMINATOR)
        if not header_block:
            raise ResponseParseError("Missing status line")

        lines = header_block.decode("iso-8859-1").split("\r\n")
        http_code = parse_status_line(lines[0])

        if http_code != CONTINUE:
            break

        skipped += 1
        if skipped > max_interim_responses:
            raise ResponseParseError(f"More than {max_interim_responses} interim responses")
        logger.debug("Skipping 100 Continue block")

    headers = [line.strip() for line in lines[1:] if line.strip()]

    content_type = None
    for header in headers:
        name, separator, value = header.partition(":")
        if separator and name.strip().lower() == "content-type":
            content_type = value.strip()
            break

    response = HttpClientResponse(
        http_code=http_code,
        content=decode_body(remainder, content_type),
        raw_content=remainder,
    )
    for header in headers:
        response.add_header(header)

    return response
