"""Request body encoding."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlencode

from urllib3.filepost import encode_multipart_formdata

from .exceptions import BodyEncodingError
from .models.request import HttpClientRequest

FORM_URLENCODED = "application/x-www-form-urlencoded"
DEFAULT_MIME_TYPE = "application/octet-stream"

# Leading bytes of common binary formats
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
)


@dataclass(frozen=True)
class RequestBody:
    """
    Encoded request body.

    Attributes:
        data: Body bytes, sent as-is
        content_type: Content-Type for the body, None to leave it to the caller's headers
    """

    data: bytes
    content_type: Optional[str] = None


def _sniff_mime_type(data: bytes) -> Optional[str]:
    for signature, mime_type in _SIGNATURES:
        if data.startswith(signature):
            return mime_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def guess_mime_type(file_path: Path, data: bytes) -> str:
    """
    Infer the MIME type of an uploaded file.

    The content is looked at first: known binary signatures (PNG, JPEG,
    GIF, PDF, ZIP, ...) win over the file name. Otherwise the extension is
    used, and files with an unknown extension are reported as text/plain
    when their content is UTF-8 text without NUL bytes and as
    application/octet-stream otherwise.

    Args:
        file_path: Path of the file
        data: File content

    Returns:
        MIME type string
    """
    sniffed = _sniff_mime_type(data)
    if sniffed:
        return sniffed

    mime_type, _ = mimetypes.guess_type(file_path.name)
    if mime_type:
        return mime_type

    if b"\x00" in data:
        return DEFAULT_MIME_TYPE
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return DEFAULT_MIME_TYPE
    return "text/plain"


def encode_body(request: HttpClientRequest, boundary: Optional[str] = None) -> Optional[RequestBody]:
    """
    Encode the body of a request.

    Raw content wins. Otherwise files make the body multipart/form-data
    (file parts first, then one part per post field), and post fields alone
    make it application/x-www-form-urlencoded. A post field replaces a file
    with the same name and takes its place among the parts.

    Args:
        request: The request
        boundary: Multipart boundary (random if None)

    Returns:
        RequestBody, or None when the request has no body

    Raises:
        BodyEncodingError: If a file to upload cannot be read
    """
    raw_content = request.raw_content
    if raw_content != "":
        return RequestBody(data=raw_content.encode("utf-8"))

    files = request.files
    post_fields = request.post_fields

    if files:
        parts: dict[str, Union[str, tuple[str, bytes, str]]] = {}
        for name, file_path in files.items():
            if name in post_fields:
                parts[name] = post_fields[name]
                continue
            try:
                data = file_path.read_bytes()
            except OSError as e:
                raise BodyEncodingError(f"Failed to read file '{file_path}': {e.strerror or e}") from e
            parts[name] = (file_path.name, data, guess_mime_type(file_path, data))
        parts.update(post_fields)

        body, content_type = encode_multipart_formdata(list(parts.items()), boundary=boundary)
        return RequestBody(data=body, content_type=content_type)

    if post_fields:
        return RequestBody(data=urlencode(post_fields).encode("ascii"), content_type=FORM_URLENCODED)

    return None
