"""
FLAC Lyrics Finder: attach LRCLIB lyrics files to a local music library

Lyrics Finder walks a music directory, reads the title, artist and album tags
of every audio file it finds, and asks the LRCLIB database (https://lrclib.net)
for matching lyrics. Whatever LRCLIB returns is written verbatim next to the
audio file as a `.lrc` sidecar with the same base name.

## Package Layout

**Configuration Management (`lyrics_finder/config/`)**
- Dataclass-based settings loaded from YAML files and environment variables
- Singleton access through `get_settings()`

**Audio Metadata (`lyrics_finder/audio/`)**
- Tag extraction with mutagen for FLAC, MP3 and M4A containers
- Unified `TrackMetadata` result regardless of tag format

**Lyrics Resolution (`lyrics_finder/lyrics/`)**
- `LrcLibClient`: async LRCLIB client for exact lookups and fuzzy searches
- `LyricsResolver`: per-track resolution with multi-artist retry, two-tier
  fallback search and instrumental detection
- `LyricsProcessor`: library walk, sidecar skip, resolution and file writing

**Utilities (`lyrics_finder/utils/`)**
- Colored console logging with optional rotating log files
- Path helpers, artist splitting and the error-suppressing combinator

## Resolution Strategy

For every track the resolver tries, in order:

1. An exact `/api/get` lookup for each artist listed in the ARTIST tag
   (split on `,` and `;`), first-listed artist first
2. A `/api/search` query with the full artist string, constrained to the album
3. The same search without the album constraint

Synced lyrics always win over plain lyrics. A track LRCLIB flags as
instrumental is reported as such when nothing else turns up.

## Usage

```bash
# Scan the current directory
lyrics-finder

# Scan a specific library with verbose diagnostics
lyrics-finder --dir ~/Music --debug
```

Re-running is safe: tracks that already have a lyrics file are skipped before
any request is made.
"""

__version__ = "1.0.0"

__author__ = "Lyrics Finder Contributors"

__description__ = "Find and save LRCLIB lyrics for local FLAC libraries"

# Client identifier sent to LRCLIB with every request
__user_agent__ = f"FLAC-Lyrics-Finder/{__version__} (lyrics-finder Python client)"

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__user_agent__",
]
