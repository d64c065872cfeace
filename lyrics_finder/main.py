"""
Command-line interface for Lyrics Finder

Walks a music directory and writes an `.lrc` lyrics file next to every audio
track LRCLIB has lyrics for. Built with Click:

    lyrics-finder                      # scan the configured directory
    lyrics-finder --dir ~/Music        # scan another directory
    lyrics-finder -d                   # print per-track diagnostics

A normal run shows a progress counter and a completion marker; `--debug`
replaces the counter with a step-by-step account of every lookup.
"""

import sys
import click
import functools
from pathlib import Path

from .config.settings import get_settings
from .lyrics.processor import LyricsProcessor
from .utils.logger import configure_from_settings, get_logger


logger = get_logger(__name__)


def handle_error(func):
    """
    Decorator to handle CLI errors gracefully

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)  # Standard exit code for SIGINT
        except Exception as e:
            logger.debug(f"Command failed: {e}", exc_info=True)
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--debug', '-d', is_flag=True, default=False, help='Enable debug mode')
@click.option('--dir', '--directory', 'directory', type=click.Path(file_okay=False), help='Specify directory')
@handle_error
def cli(debug, directory):
    """
    Find lyrics for the audio files in a directory

    Every track found below the directory is looked up on LRCLIB by its
    title, artist and album tags. Lyrics are saved next to the track as a
    .lrc file with the same name. Tracks that already have one are skipped.
    """
    configure_from_settings(debug=debug)
    settings = get_settings()

    if not settings.validate():
        raise click.ClickException("Invalid configuration")

    root_directory = Path(directory).expanduser() if directory else settings.get_scan_directory()

    processor = LyricsProcessor(debug=debug)
    processor.run(root_directory)


# Entry point for module execution
if __name__ == '__main__':
    cli()
