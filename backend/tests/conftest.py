"""
Root pytest configuration for backend tests.

Provides:
- Shared fixtures (app, client, fixed_clock)
- make_stream: FakeStream, a file-like source that counts reads and closes
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add backend directory to Python path so imports like
# `from response_contracts import ...` and `from app import create_app` work
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest


FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2025-01-01T12:00:00.000Z"
ISO_8601_UTC = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$"


class FakeStream:
    """
    File-like stream source.

    Returns one queued chunk per read(). With fail_after=n, the read after
    the first n chunks raises error instead.
    """

    def __init__(self, chunks, fail_after=None, error=None):
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self._error = error or IOError("source went away")
        self.reads = 0
        self.close_calls = 0
        self.closed = False

    def read(self, size=-1):
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise self._error
        self.reads += 1
        if not self._chunks:
            return b""
        return self._chunks.pop(0)

    def close(self):
        self.close_calls += 1
        self.closed = True


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def fixed_timestamp():
    """Timestamp text produced by fixed_clock."""
    return FIXED_TIMESTAMP


@pytest.fixture
def iso_pattern():
    """Regex for the ISO-8601 UTC timestamps contracts carry."""
    return ISO_8601_UTC


@pytest.fixture
def make_stream():
    """Factory for FakeStream sources."""
    return FakeStream


@pytest.fixture
def app():
    """Create test Flask application."""
    from app import create_app

    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
