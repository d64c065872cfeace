"""
Utility functions for Lyrics Finder
Artist tag splitting, sidecar paths, library discovery and error suppression
"""

import functools
import os
import re
from pathlib import Path
from typing import Any, Callable, Iterable, List, Union

# ARTIST tags list several performers separated by commas or semicolons
ARTIST_SEPARATORS = re.compile(r'[,;]')


def split_artists(artist: str) -> List[str]:
    """
    Split a raw ARTIST tag into its candidate artist names

    Order is preserved since it defines lookup priority. Every fragment is
    trimmed but kept, so "A, B;C" yields ["A", "B", "C"].

    Args:
        artist: Raw artist tag value

    Returns:
        Ordered list of artist names
    """
    if not artist:
        return []
    return [part.strip() for part in ARTIST_SEPARATORS.split(artist)]


def get_sidecar_path(audio_path: Union[str, Path], extension: str = ".lrc") -> Path:
    """
    Get the lyrics file path that belongs next to an audio file

    Args:
        audio_path: Path to the audio file
        extension: Lyrics file extension, including the dot

    Returns:
        Sibling path with the same base name and the lyrics extension
    """
    audio_path = Path(audio_path)
    return audio_path.with_name(f"{audio_path.stem}{extension}")


def has_extension(path: Union[str, Path], extensions: Iterable[str]) -> bool:
    """Check a file name against a list of extensions, ignoring case"""
    suffix = Path(path).suffix.lower()
    return suffix in {ext.lower() for ext in extensions}


def find_audio_files(root: Union[str, Path], extensions: Iterable[str] = (".flac",)) -> List[Path]:
    """
    Recursively collect audio files below a directory

    Entries are visited in name order and subdirectories are descended into
    as they are met, so the result order is stable between runs. Symbolic
    links to directories are not descended into.

    Args:
        root: Library root directory
        extensions: Accepted audio extensions (case-insensitive)

    Returns:
        List of audio file paths in discovery order

    Raises:
        OSError: If the root directory cannot be listed
    """
    extensions = [ext.lower() for ext in extensions]
    found = []

    def _walk(directory: Path) -> None:
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.is_dir(follow_symlinks=False):
                    _walk(Path(entry.path))
                elif has_extension(entry.name, extensions):
                    found.append(Path(entry.path))

    _walk(Path(root))
    return found


def suppress_errors(default_factory: Callable[[], Any], on_error: Callable[[Exception], None] = None):
    """
    Decorator for coroutines whose failures should degrade to a default value

    Any exception raised by the wrapped coroutine is reported through
    `on_error` (if given) and replaced with `default_factory()`.
    Cancellation is not an error and always propagates.

    Args:
        default_factory: Builds the value returned on failure
        on_error: Optional callback receiving the exception
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if on_error is not None:
                    on_error(e)
                return default_factory()
        return wrapper
    return decorator
