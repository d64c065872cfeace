"""
Data models for lyrics resolution

This module defines the values that flow through one track's resolution:

1. **LyricsResult**: the decoded answer to a single LRCLIB query
2. **ResolutionOutcome**: the final verdict for a track
3. **TrackStatus / ProcessingStats**: per-file processing status and the
   run summary built from it

LRCLIB responses expose `syncedLyrics`, `plainLyrics` and `instrumental` as
independent optional fields. `LyricsResult.from_response` is the one place
where they are collapsed into a single outcome, with the precedence
Synced > Plain > Instrumental > Empty.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class LyricsKind(Enum):
    """
    Kinds of answer LRCLIB can give for a single query

    Values:
        SYNCED: Time-synced (LRC) lyrics text
        PLAIN: Plain lyrics text without timing
        INSTRUMENTAL: The track is known to have no lyrics
        EMPTY: No usable answer (not found, or the request failed)
    """
    SYNCED = "synced"
    PLAIN = "plain"
    INSTRUMENTAL = "instrumental"
    EMPTY = "empty"


@dataclass(frozen=True)
class LyricsResult:
    """
    Decoded result of one exact lookup or fuzzy search

    Only SYNCED and PLAIN results carry text. Search results also remember
    the artist and track names of the matched record for diagnostics.
    """
    kind: LyricsKind
    text: Optional[str] = None
    artist_name: Optional[str] = None
    track_name: Optional[str] = None

    @classmethod
    def synced(cls, text: str, **names) -> "LyricsResult":
        return cls(LyricsKind.SYNCED, text, **names)

    @classmethod
    def plain(cls, text: str, **names) -> "LyricsResult":
        return cls(LyricsKind.PLAIN, text, **names)

    @classmethod
    def instrumental(cls, **names) -> "LyricsResult":
        return cls(LyricsKind.INSTRUMENTAL, **names)

    @classmethod
    def empty(cls) -> "LyricsResult":
        return cls(LyricsKind.EMPTY)

    @classmethod
    def from_response(cls, payload: Any) -> "LyricsResult":
        """
        Decode an LRCLIB track record into a result

        Synced text takes precedence over plain text when a record has both.
        The instrumental flag only matters when neither text is present.
        Empty text fields count as missing; any other text is kept verbatim.

        Args:
            payload: JSON object returned by LRCLIB for one track

        Returns:
            LyricsResult for the record, EMPTY for anything that is not a record
        """
        if not isinstance(payload, dict):
            return cls.empty()

        names = {
            'artist_name': payload.get('artistName'),
            'track_name': payload.get('trackName'),
        }

        synced_text = payload.get('syncedLyrics')
        if isinstance(synced_text, str) and synced_text:
            return cls.synced(synced_text, **names)

        plain_text = payload.get('plainLyrics')
        if isinstance(plain_text, str) and plain_text:
            return cls.plain(plain_text, **names)

        if payload.get('instrumental'):
            return cls.instrumental(**names)

        return cls.empty()

    @property
    def has_text(self) -> bool:
        return self.kind in (LyricsKind.SYNCED, LyricsKind.PLAIN)

    @property
    def is_synced(self) -> bool:
        return self.kind is LyricsKind.SYNCED

    @property
    def is_instrumental(self) -> bool:
        return self.kind is LyricsKind.INSTRUMENTAL


class OutcomeStatus(Enum):
    """
    Final verdict of a track resolution

    Values:
        WRITTEN: Lyrics text was found and should be persisted
        NOT_FOUND: No lyrics were found
        NOT_FOUND_INSTRUMENTAL: No lyrics were found and LRCLIB reported the
            track as instrumental during the exact lookups
    """
    WRITTEN = "written"
    NOT_FOUND = "not_found"
    NOT_FOUND_INSTRUMENTAL = "not_found_instrumental"


class ResolutionStage(Enum):
    """Step of the resolution that produced the lyrics text"""
    EXACT = "exact"
    SEARCH_WITH_ALBUM = "search_album"
    SEARCH = "search"


@dataclass(frozen=True)
class ResolutionOutcome:
    """
    Terminal value of resolving one track

    Attributes:
        status: Final verdict
        text: Lyrics text to persist (WRITTEN only)
        synced: Whether the text is time-synced (WRITTEN only)
        stage: Resolution step that produced the text (WRITTEN only)
        matched_artist: Artist candidate that matched an exact lookup
    """
    status: OutcomeStatus
    text: Optional[str] = None
    synced: bool = False
    stage: Optional[ResolutionStage] = None
    matched_artist: Optional[str] = None

    @classmethod
    def written(
        cls,
        result: LyricsResult,
        stage: ResolutionStage,
        matched_artist: Optional[str] = None
    ) -> "ResolutionOutcome":
        return cls(
            OutcomeStatus.WRITTEN,
            text=result.text,
            synced=result.is_synced,
            stage=stage,
            matched_artist=matched_artist
        )

    @classmethod
    def not_found(cls, instrumental: bool = False) -> "ResolutionOutcome":
        if instrumental:
            return cls(OutcomeStatus.NOT_FOUND_INSTRUMENTAL)
        return cls(OutcomeStatus.NOT_FOUND)

    @property
    def found(self) -> bool:
        return self.status is OutcomeStatus.WRITTEN


class TrackStatus(Enum):
    """
    Processing status of a single audio file

    Values:
        WRITTEN: A lyrics file was written
        NOT_FOUND: Resolution found nothing
        INSTRUMENTAL: Resolution found nothing and the track is instrumental
        SKIPPED_EXISTING: A lyrics file already existed
        SKIPPED_NO_METADATA: Tags could not be read
        SKIPPED_INCOMPLETE: Title or artist tag missing
        FAILED: Lyrics were found but could not be written
    """
    WRITTEN = "written"
    NOT_FOUND = "not_found"
    INSTRUMENTAL = "instrumental"
    SKIPPED_EXISTING = "skipped_existing"
    SKIPPED_NO_METADATA = "skipped_no_metadata"
    SKIPPED_INCOMPLETE = "skipped_incomplete"
    FAILED = "failed"


@dataclass
class ProcessingStats:
    """
    Counters for one library run

    Attributes:
        total: Number of audio files discovered
        counts: Number of files per TrackStatus
    """
    total: int = 0
    counts: Dict[TrackStatus, int] = field(default_factory=lambda: {status: 0 for status in TrackStatus})

    def record(self, status: TrackStatus) -> None:
        self.counts[status] += 1

    @property
    def processed(self) -> int:
        return sum(self.counts.values())

    @property
    def written(self) -> int:
        return self.counts[TrackStatus.WRITTEN]

    @property
    def skipped(self) -> int:
        return (
            self.counts[TrackStatus.SKIPPED_EXISTING]
            + self.counts[TrackStatus.SKIPPED_NO_METADATA]
            + self.counts[TrackStatus.SKIPPED_INCOMPLETE]
        )

    @property
    def not_found(self) -> int:
        return self.counts[TrackStatus.NOT_FOUND] + self.counts[TrackStatus.INSTRUMENTAL]

    def summary(self) -> str:
        return (
            f"{self.written} written, {self.not_found} not found "
            f"({self.counts[TrackStatus.INSTRUMENTAL]} instrumental), "
            f"{self.skipped} skipped, {self.counts[TrackStatus.FAILED]} failed"
        )
