"""Request, response and configuration models."""

from .config import HandlerConfig
from .request import HttpClientRequest
from .response import HttpClientResponse

__all__ = [
    "HandlerConfig",
    "HttpClientRequest",
    "HttpClientResponse",
]
