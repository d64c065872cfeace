"""
Audio metadata package

Extracts the title, artist and album tags that drive lyrics resolution:

    from lyrics_finder.audio import get_metadata_reader

    metadata = get_metadata_reader().read_metadata("song.flac")
    if metadata is not None and metadata.is_complete:
        ...
"""

from .metadata import MetadataReader, TrackMetadata, get_metadata_reader

__all__ = [
    'MetadataReader',        # Tag reader for FLAC, MP3 and M4A files
    'TrackMetadata',         # Title/artist/album tags of one file
    'get_metadata_reader',   # Shared reader instance
]
