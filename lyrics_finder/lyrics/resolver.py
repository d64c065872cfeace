"""
Lyrics resolution for a single track

The resolver turns one track's tag metadata into a ResolutionOutcome by
querying LRCLIB in a fixed order and stopping at the first lyrics text:

1. Precondition: a track without title or artist is NOT_FOUND without any
   request being made.
2. Exact lookups: one `/api/get` per artist listed in the ARTIST tag, in tag
   order. An INSTRUMENTAL answer is remembered but does not stop the loop,
   since multi-artist tags are often inconsistent between releases.
3. Fallback search with album: one `/api/search` with the full, unsplit
   artist string and the album. If it returns any record, the top record
   is final whether or not it carries lyrics.
4. Fallback search without album: the same search, unconstrained, only
   when the album search returned no records or failed.
5. Final determination: NOT_FOUND_INSTRUMENTAL if any exact lookup reported
   the track as instrumental, NOT_FOUND otherwise.

The instrumental flag is only consulted in step 5. A lyrics text from a
later step still wins over an earlier instrumental answer.
"""

from typing import Optional

from ..audio.metadata import TrackMetadata
from ..utils.logger import get_logger
from .lrclib import LrcLibClient
from .models import LyricsResult, ResolutionOutcome, ResolutionStage


class LyricsResolver:
    """
    Resolves lyrics for one track at a time through an LRCLIB client

    The resolver holds no per-track state; every call to `resolve` keeps its
    candidate list and instrumental flag local, so it can be reused for a
    whole library run.
    """

    def __init__(self, client: LrcLibClient):
        """
        Args:
            client: Open LRCLIB client (or any object with the same
                `exact_lookup` and `fuzzy_search` coroutines)
        """
        self.client = client
        self.logger = get_logger(__name__)

    async def resolve(self, metadata: Optional[TrackMetadata]) -> ResolutionOutcome:
        """
        Resolve lyrics for one track

        Args:
            metadata: Extracted track tags

        Returns:
            WRITTEN outcome carrying the lyrics text, NOT_FOUND, or
            NOT_FOUND_INSTRUMENTAL
        """
        if metadata is None or not metadata.is_complete:
            return ResolutionOutcome.not_found()

        title, album = metadata.title, metadata.album
        artists = metadata.artists
        self.logger.debug(f"Artists found: {', '.join(artists)}")

        instrumental = False

        # Exact lookup for each listed artist, first-listed first
        for candidate in artists:
            self.logger.debug(f"Trying to fetch lyrics with artist='{candidate}' and title='{title}'")
            result = await self.client.exact_lookup(candidate, title, album)

            if result.has_text:
                self.logger.debug(
                    f"Downloaded {result.kind.value} lyrics for '{candidate} - {title}'",
                    extra={'color': 'green'}
                )
                return ResolutionOutcome.written(result, ResolutionStage.EXACT, matched_artist=candidate)

            if result.is_instrumental:
                instrumental = True
            elif len(artists) > 1:
                self.logger.debug(f"Lyrics not found for '{candidate} - {title}'. Trying next artist...")
            else:
                self.logger.debug(f"Lyrics not found for '{candidate} - {title}'.")

        self.logger.debug(
            f"No lyrics found using /api/get. Attempting fallback search for '{title}'...",
            extra={'color': 'magenta'}
        )

        # Fallback searches use the raw artist tag, album-constrained first.
        # The first search that returns any record decides the track.
        fallbacks = (
            (ResolutionStage.SEARCH_WITH_ALBUM, album),
            (ResolutionStage.SEARCH, None),
        )
        for stage, album_filter in fallbacks:
            result = await self.client.fuzzy_search(title, metadata.artist, album_filter)
            if result is None:
                continue
            if result.has_text:
                self._log_fallback_hit(result, metadata)
                return ResolutionOutcome.written(result, stage)
            break

        if instrumental:
            self.logger.debug(
                f"The lyrics were not found for '{title}' because this is an instrumental track."
            )
        else:
            self.logger.debug(
                f"Lyrics not found for '{title}' with any of the provided artists: {', '.join(artists)}",
                extra={'color': 'red'}
            )
        return ResolutionOutcome.not_found(instrumental=instrumental)

    def _log_fallback_hit(self, result: LyricsResult, metadata: TrackMetadata) -> None:
        artist_name = result.artist_name or metadata.artist
        track_name = result.track_name or metadata.title
        self.logger.debug(
            f"Fallback: Downloaded {result.kind.value} lyrics for '{artist_name} - {track_name}'",
            extra={'color': 'green'}
        )
