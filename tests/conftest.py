"""Test configuration and fixtures"""

import logging
import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

from lyrics_finder.audio.metadata import TrackMetadata
from lyrics_finder.lyrics.models import LyricsResult


class FakeLrcLibClient:
    """In-memory stand-in for LrcLibClient that records every query"""

    def __init__(self, exact=None, search_with_album=None, search=None):
        # exact: artist name -> LyricsResult
        self.exact = exact or {}
        # None stands for a search that returned no records
        self.search_with_album = search_with_album
        self.search = search
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def exact_lookup(self, artist, title, album):
        self.calls.append(('get', artist, title, album))
        return self.exact.get(artist, LyricsResult.empty())

    async def fuzzy_search(self, title, artist, album=None):
        self.calls.append(('search', title, artist, album))
        if album is not None:
            return self.search_with_album
        return self.search

    @property
    def search_calls(self):
        return [call for call in self.calls if call[0] == 'search']


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Undo console handlers installed by CLI runs"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    yield
    root_logger.handlers[:] = handlers


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def make_client():
    """Factory for fake LRCLIB clients"""
    return FakeLrcLibClient


@pytest.fixture
def sample_metadata():
    """Sample track metadata with two listed artists"""
    return TrackMetadata(title="Test Song", artist="First Artist, Second Artist", album="Test Album")


@pytest.fixture
def metadata_reader():
    """Mock metadata reader returning one complete track for every file"""
    reader = Mock()
    reader.read_metadata.return_value = TrackMetadata(
        title="Test Song", artist="Test Artist", album="Test Album"
    )
    return reader
