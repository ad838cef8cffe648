import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from helpers.fake_transport import FakeTransport  # noqa: E402

from http_client import TransportRequestHandler  # noqa: E402

FILES_DIR = Path(__file__).resolve().parent / "files"


@pytest.fixture
def files_dir() -> Path:
    return FILES_DIR


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def handler(fake_transport):
    """TransportRequestHandler running on the fake transport."""
    with TransportRequestHandler(transport=fake_transport) as request_handler:
        yield request_handler
