"""
Audio tag extraction for lyrics resolution

Reads the three tags the resolver needs (title, artist, album) from audio
files using mutagen, and hides the differences between tag formats:

- **FLAC**: Vorbis Comments TITLE, ARTIST, ALBUM
- **MP3**: ID3v2 frames TIT2, TPE1, TALB
- **M4A/MP4**: iTunes atoms ©nam, ©ART, ©alb

Tags holding several values (e.g. two ARTIST comments in one FLAC file) are
joined with "; " so that they split back into the same artist candidates as a
single "A; B" tag would.

Missing individual tags come back as empty strings. A file that cannot be
parsed, has no tag block at all, or uses an unsupported container yields
None; callers treat both situations as "skip this track".
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from mutagen.flac import FLAC
from mutagen.id3 import ID3
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4

from ..utils.helpers import split_artists
from ..utils.logger import get_logger


@dataclass(frozen=True)
class TrackMetadata:
    """
    Tag metadata extracted from one audio file

    Attributes:
        title: Track title
        artist: Raw artist tag, possibly listing several artists
        album: Album name (may be empty)
    """
    title: str
    artist: str
    album: str = ""

    @property
    def artists(self) -> List[str]:
        """Candidate artist names in lookup priority order"""
        return split_artists(self.artist)

    @property
    def is_complete(self) -> bool:
        """Whether the tags are usable for a lookup (title and artist present)"""
        return bool(self.title) and bool(self.artist)


def _join_values(values: Optional[Iterable]) -> str:
    """Join a multi-valued tag into one string"""
    if not values:
        return ''
    return '; '.join(str(value) for value in values)


class MetadataReader:
    """Reads title/artist/album tags from audio files"""

    def __init__(self):
        self.logger = get_logger(__name__)

    def read_metadata(self, file_path: Union[str, Path]) -> Optional[TrackMetadata]:
        """
        Read track metadata from an audio file

        Args:
            file_path: Path to the audio file

        Returns:
            TrackMetadata with possibly empty fields, or None if the file
            cannot be read or carries no tags
        """
        file_path = Path(file_path)
        readers = {
            '.flac': self._read_flac_metadata,
            '.mp3': self._read_mp3_metadata,
            '.m4a': self._read_mp4_metadata,
            '.mp4': self._read_mp4_metadata,
        }

        reader = readers.get(file_path.suffix.lower())
        if reader is None:
            self.logger.debug(f"Unsupported audio format for file: {file_path}")
            return None

        try:
            metadata = reader(str(file_path))
        except Exception as e:
            self.logger.debug(f"Failed to extract metadata for file: {file_path}\n{e}", extra={'color': 'red'})
            return None

        if metadata is None:
            self.logger.debug(f"Unexpected metadata format for file: {file_path}", extra={'color': 'yellow'})
        return metadata

    def _read_flac_metadata(self, file_path: str) -> Optional[TrackMetadata]:
        audio = FLAC(file_path)
        if audio.tags is None:
            return None

        # Vorbis comment keys are case-insensitive
        return TrackMetadata(
            title=_join_values(audio.tags.get('TITLE')),
            artist=_join_values(audio.tags.get('ARTIST')),
            album=_join_values(audio.tags.get('ALBUM')),
        )

    def _read_mp3_metadata(self, file_path: str) -> Optional[TrackMetadata]:
        audio = MP3(file_path, ID3=ID3)
        if audio.tags is None:
            return None

        def frame_text(frame_id: str) -> str:
            frame = audio.tags.get(frame_id)
            return _join_values(frame.text) if frame is not None else ''

        return TrackMetadata(
            title=frame_text('TIT2'),
            artist=frame_text('TPE1'),
            album=frame_text('TALB'),
        )

    def _read_mp4_metadata(self, file_path: str) -> Optional[TrackMetadata]:
        audio = MP4(file_path)
        if audio.tags is None:
            return None

        return TrackMetadata(
            title=_join_values(audio.tags.get('\xa9nam')),
            artist=_join_values(audio.tags.get('\xa9ART')),
            album=_join_values(audio.tags.get('\xa9alb')),
        )


# Global metadata reader instance
_metadata_reader: Optional[MetadataReader] = None


def get_metadata_reader() -> MetadataReader:
    """Get the shared MetadataReader instance"""
    global _metadata_reader
    if not _metadata_reader:
        _metadata_reader = MetadataReader()
    return _metadata_reader
