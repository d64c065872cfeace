"""
Utilities package
Logging, path helpers and error handling utilities
"""

from .logger import (
    get_logger,
    configure_from_settings,
    setup_logging,
    OperationLogger
)
from .helpers import (
    split_artists,
    get_sidecar_path,
    has_extension,
    find_audio_files,
    suppress_errors
)

__all__ = [
    # Logger exports
    'get_logger',
    'configure_from_settings',
    'setup_logging',
    'OperationLogger',

    # Helper exports
    'split_artists',
    'get_sidecar_path',
    'has_extension',
    'find_audio_files',
    'suppress_errors'
]
