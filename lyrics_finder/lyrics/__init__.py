"""
Lyrics resolution package

Components:
- LrcLibClient: async LRCLIB client with exact lookup and fuzzy search
- LyricsResolver: per-track resolution (multi-artist retry, album and
  album-less fallback searches, instrumental detection)
- LyricsProcessor: library walk, sidecar skip, resolution and file writing

Typical use goes through the processor:

    processor = LyricsProcessor(debug=False)
    stats = processor.run(Path.home() / "Music")

The resolver can also be driven directly with an open client:

    async with LrcLibClient() as client:
        outcome = await LyricsResolver(client).resolve(metadata)
"""

from .models import (
    LyricsKind,
    LyricsResult,
    OutcomeStatus,
    ResolutionStage,
    ResolutionOutcome,
    TrackStatus,
    ProcessingStats
)
from .lrclib import LrcLibClient
from .resolver import LyricsResolver
from .processor import LyricsProcessor

__all__ = [
    # Result models
    'LyricsKind',
    'LyricsResult',
    'OutcomeStatus',
    'ResolutionStage',
    'ResolutionOutcome',
    'TrackStatus',
    'ProcessingStats',

    # Remote lookup client
    'LrcLibClient',

    # Resolution and library processing
    'LyricsResolver',
    'LyricsProcessor'
]
