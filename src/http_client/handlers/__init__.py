"""Request handlers for HttpClient."""

from .transport import TransportRequestHandler

__all__ = ["TransportRequestHandler"]
