"""Shared pytest fixtures for tmsdownloader tests."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tmsdownloader.projection import MAX_LATITUDE, BoundingBox


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def whole_world():
    """Bounding box covering the whole Web Mercator square."""
    return BoundingBox(-180.0, -MAX_LATITUDE, 180.0, MAX_LATITUDE)


@pytest.fixture
def scandinavia():
    """A box that does not touch any low-zoom tile boundary."""
    return BoundingBox(4.3, 54.7, 31.2, 71.1)


@pytest.fixture
def mock_session():
    """Provide a mock requests.Session returning a PNG-ish body."""
    session = MagicMock()
    response = MagicMock()
    response.content = b"\x89PNG tile"
    response.raise_for_status.return_value = None
    session.get.return_value = response
    return session
