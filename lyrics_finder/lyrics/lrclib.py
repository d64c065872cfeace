"""
LRCLIB client for exact lyrics lookups and fuzzy searches

LRCLIB (https://lrclib.net) is a free lyrics database that needs no API key.
Two endpoints are used:

- `GET /api/get`: exact lookup by artist, track and album name. Answers with
  a single track record, or 404 when nothing matches.
- `GET /api/search`: fuzzy search by track and artist name, optionally
  restricted to an album. Answers with a ranked array of track records.

Track records carry optional `syncedLyrics`, `plainLyrics` and
`instrumental` fields, plus `artistName`/`trackName` of the matched record.

A missing lyrics record is an everyday outcome, so the client never raises:
transport errors, HTTP errors and undecodable bodies all come back as a
"no answer" result: EMPTY for exact lookups, None for searches. Both
public operations get this behaviour from the same `suppress_errors`
decorator.

Usage:

    async with LrcLibClient() as client:
        result = await client.exact_lookup("Artist", "Title", "Album")
        if result.has_text:
            print(result.text)
"""

from typing import Any, Dict, Optional

import aiohttp

from ..config.settings import get_settings
from ..utils.logger import get_logger
from ..utils.helpers import suppress_errors
from .models import LyricsResult

logger = get_logger(__name__)


def _log_request_failure(error: Exception) -> None:
    logger.debug(f"LRCLIB request failed, treating as no result: {error!r}")


class LrcLibClient:
    """
    Async client for the LRCLIB lyrics API

    The client owns an `aiohttp.ClientSession` for its lifetime when used as
    an async context manager. A session created elsewhere can be passed in
    instead, in which case the caller keeps ownership and must close it.

    Every request carries the configured User-Agent and is bounded by the
    configured total timeout.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize client from application settings

        Args:
            base_url: LRCLIB root URL, defaults to settings
            user_agent: Client identifier header, defaults to settings
            timeout: Total per-request timeout in seconds, defaults to settings
            session: Externally owned session to reuse
        """
        settings = get_settings()

        self.base_url = (base_url or settings.lrclib.base_url).rstrip("/")
        self.user_agent = user_agent or settings.lrclib.user_agent
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.lrclib.timeout)

        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "LrcLibClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this client created it"""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _get_json(self, path: str, params: Dict[str, str]) -> Any:
        """
        Issue a GET request and decode the JSON body

        Query parameters are percent-encoded by aiohttp.

        Raises:
            RuntimeError: If the client is used outside its context
            aiohttp.ClientError: On transport failures and non-2xx statuses
            ValueError: If the body is not valid JSON
        """
        if self._session is None:
            raise RuntimeError("LrcLibClient used outside of 'async with'")

        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} {params}")

        async with self._session.get(
            url,
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout
        ) as response:
            response.raise_for_status()
            # LRCLIB does not always label its JSON correctly
            return await response.json(content_type=None)

    @suppress_errors(LyricsResult.empty, on_error=_log_request_failure)
    async def exact_lookup(self, artist: str, title: str, album: str) -> LyricsResult:
        """
        Look up lyrics for an exact artist/title/album combination

        Args:
            artist: Exact artist name
            title: Track title
            album: Album name

        Returns:
            SYNCED, PLAIN or INSTRUMENTAL result, or EMPTY when LRCLIB has no
            record or the request fails
        """
        payload = await self._get_json("/api/get", {
            "artist_name": artist,
            "track_name": title,
            "album_name": album,
        })
        return LyricsResult.from_response(payload)

    @suppress_errors(lambda: None, on_error=_log_request_failure)
    async def fuzzy_search(self, title: str, artist: str, album: Optional[str] = None) -> Optional[LyricsResult]:
        """
        Search for lyrics and return the top-ranked match

        LRCLIB's own ranking is trusted; only the first record is decoded.
        A non-empty answer is final even when that record has no text, so
        "no records" (None) is kept apart from "top record is empty" (EMPTY).

        Args:
            title: Track title
            artist: Artist name, used as given (not split)
            album: Restrict the search to this album when provided

        Returns:
            Decoded first record, or None for no records or a failed request
        """
        params = {
            "track_name": title,
            "artist_name": artist,
        }
        if album is not None:
            params["album_name"] = album

        scope = "with album" if album is not None else "without album"
        records = await self._get_json("/api/search", params)

        if not isinstance(records, list) or not records:
            logger.debug(f"Fallback search {scope} found no results for '{title}'")
            return None

        logger.debug(
            f"Fallback search {scope} returned {len(records)} result(s). Using the first result.",
            extra={'color': 'magenta'}
        )
        return LyricsResult.from_response(records[0])
