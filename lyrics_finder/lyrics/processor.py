"""
Library processing: discover tracks, resolve lyrics, write sidecar files

The processor drives a whole run over a music directory:

1. Discovery: recursive walk collecting files with a configured audio
   extension (case-insensitive), in a stable name order
2. Per file, strictly one after another:
   a. Read title/artist/album tags; unreadable tags skip the file
   b. Skip the file when title or artist is empty
   c. Skip the file when its `.lrc` sidecar already exists, so re-runs
      never repeat a request or overwrite a file
   d. Resolve lyrics through the LyricsResolver
   e. Write the returned text verbatim (UTF-8) to the sidecar path
3. Report progress and print the completion marker

Only one LRCLIB request is ever in flight. Tracks are awaited in sequence
inside a single event loop, which keeps the request rate to LRCLIB low at the
cost of wall-clock time.

No failure of a single file stops the run: tag errors, network errors and
write errors are logged and counted, and processing moves to the next file.
"""

import asyncio
import os
from pathlib import Path
from typing import Callable, Optional, Union

from ..audio.metadata import MetadataReader, get_metadata_reader
from ..config.settings import get_settings
from ..utils.helpers import find_audio_files, get_sidecar_path
from ..utils.logger import get_logger, OperationLogger
from .lrclib import LrcLibClient
from .models import OutcomeStatus, ProcessingStats, TrackStatus
from .resolver import LyricsResolver


class LyricsProcessor:
    """
    Coordinates metadata extraction, lyrics resolution and sidecar writing

    Attributes:
        audio_extensions: Extensions treated as audio tracks
        lyrics_extension: Extension of the sidecar lyrics files
        debug: Print per-step diagnostics instead of a progress bar
    """

    def __init__(
        self,
        debug: bool = False,
        metadata_reader: Optional[MetadataReader] = None,
        client_factory: Callable[[], LrcLibClient] = LrcLibClient
    ):
        """
        Initialize processor from application settings

        Args:
            debug: Verbose diagnostic mode
            metadata_reader: Tag reader, defaults to the shared instance
            client_factory: Builds the LRCLIB client used for a run
        """
        self.settings = get_settings()
        self.logger = get_logger(__name__)

        self.audio_extensions = list(self.settings.scan.audio_extensions)
        self.lyrics_extension = self.settings.scan.lyrics_extension
        self.debug = debug

        self.metadata_reader = metadata_reader or get_metadata_reader()
        self.client_factory = client_factory

    def run(self, root_directory: Union[str, Path]) -> ProcessingStats:
        """
        Process a library directory to completion

        Args:
            root_directory: Library root to walk

        Returns:
            ProcessingStats for the run
        """
        return asyncio.run(self.process_directory(root_directory))

    async def process_directory(self, root_directory: Union[str, Path]) -> ProcessingStats:
        """
        Find every audio file below a directory and process them in order

        Args:
            root_directory: Library root to walk

        Returns:
            ProcessingStats for the run

        Raises:
            OSError: If the root directory cannot be walked
        """
        root_directory = Path(root_directory)
        self.logger.debug(f"Using directory: {root_directory}", extra={'color': 'yellow'})

        audio_files = find_audio_files(root_directory, self.audio_extensions)
        extensions = '/'.join(self.audio_extensions)
        self.logger.debug(f"Found {len(audio_files)} {extensions} files.", extra={'color': 'cyan'})

        stats = ProcessingStats(total=len(audio_files))
        operation = OperationLogger(self.logger, "Processing", show_progress=not self.debug)
        operation.start()

        try:
            async with self.client_factory() as client:
                resolver = LyricsResolver(client)

                for index, file_path in enumerate(audio_files, start=1):
                    self.logger.debug(f"Processing file: {file_path}", extra={'color': 'cyan'})
                    operation.progress(index, len(audio_files))

                    status = await self.process_file(file_path, resolver)
                    stats.record(status)

                    self.logger.debug("")
        except Exception as e:
            operation.error(str(e), e)
            raise

        self.logger.debug(f"Run summary: {stats.summary()}")
        operation.complete("Processing completed.")
        return stats

    async def process_file(self, file_path: Union[str, Path], resolver: LyricsResolver) -> TrackStatus:
        """
        Process a single audio file

        Args:
            file_path: Audio file to process
            resolver: Resolver bound to an open LRCLIB client

        Returns:
            TrackStatus describing what happened to the file
        """
        file_path = Path(file_path)

        metadata = self.metadata_reader.read_metadata(file_path)
        if metadata is None:
            self.logger.debug(
                f"Skipping file due to metadata extraction failure: {file_path}",
                extra={'color': 'yellow'}
            )
            return TrackStatus.SKIPPED_NO_METADATA

        self.logger.debug(
            f"Extracted metadata: Title='{metadata.title}', Artist='{metadata.artist}', Album='{metadata.album}'"
        )

        if not metadata.is_complete:
            self.logger.debug(f"Incomplete metadata for '{file_path}'. Skipping...", extra={'color': 'yellow'})
            return TrackStatus.SKIPPED_INCOMPLETE

        lyrics_path = get_sidecar_path(file_path, self.lyrics_extension)
        if lyrics_path.exists():
            self.logger.debug(
                f"Lyrics file already exists for '{metadata.title}'. Skipping...",
                extra={'color': 'yellow'}
            )
            return TrackStatus.SKIPPED_EXISTING

        outcome = await resolver.resolve(metadata)

        if outcome.status is OutcomeStatus.NOT_FOUND_INSTRUMENTAL:
            return TrackStatus.INSTRUMENTAL
        if outcome.status is OutcomeStatus.NOT_FOUND:
            return TrackStatus.NOT_FOUND

        try:
            self.write_lyrics(lyrics_path, outcome.text)
        except (OSError, UnicodeError) as e:
            self.logger.error(f"Failed to write lyrics file {lyrics_path}: {e}")
            return TrackStatus.FAILED

        return TrackStatus.WRITTEN

    def write_lyrics(self, lyrics_path: Path, text: str) -> None:
        """
        Write lyrics text verbatim to a sidecar file

        The text is written to a temporary sibling first and moved into
        place, so a failed write never leaves a partial sidecar that later
        runs would mistake for a finished track.

        Args:
            lyrics_path: Destination path
            text: Lyrics exactly as returned by LRCLIB

        Raises:
            UnicodeError: If the text cannot be encoded as UTF-8
            OSError: If the file cannot be written
        """
        data = text.encode('utf-8')
        temp_path = lyrics_path.with_name(f"{lyrics_path.name}.tmp")

        try:
            with open(temp_path, 'wb') as f:
                f.write(data)
            os.replace(temp_path, lyrics_path)
        except OSError:
            if temp_path.exists():
                os.unlink(temp_path)
            raise

        self.logger.debug(f"Saved lyrics: {lyrics_path.name}")
