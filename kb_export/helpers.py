"""Helper functions for the kb_export package.

This module contains utility functions used across the kb_export package,
including filename sanitization, output-path hardening and the timestamp
formats used for export directories and archive names.
"""

import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9]')
_LEADING_PARENT_REFS = re.compile(r'^(\.\.[/\\])+')


def sanitize_file_name(name: str) -> str:
    """Turn a document display name into a filesystem-safe file stem.

    Every character outside ``[a-zA-Z0-9]`` becomes ``_``, the result is
    lower-cased and any leading ``.`` is stripped.

    Args:
        name: Document name as returned by the API

    Returns:
        Sanitized file stem (may be empty for an empty name)

    Example:
        >>> sanitize_file_name("My FAQ (v2).pdf")
        'my_faq__v2__pdf'
    """
    return _UNSAFE_CHARS.sub('_', name).lower().lstrip('.')


def safe_output_path(directory: Union[str, Path], stem: str, extension: str) -> Path:
    """Join an export directory with a file stem and extension, then normalize.

    Leading ``../`` (or ``..\\``) sequences left after normalization are
    removed so the path cannot climb out of a relative export root.

    Args:
        directory: Export directory
        stem: Sanitized file stem
        extension: Extension including the dot (".txt", ".json")

    Returns:
        Normalized output path

    Example:
        >>> safe_output_path("exports/run", "faq", ".txt").as_posix()
        'exports/run/faq.txt'
    """
    joined = os.path.join(str(directory), f"{stem}{extension}")
    return Path(_LEADING_PARENT_REFS.sub('', os.path.normpath(joined)))


def utc_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware UTC datetime, defaulting to the current time."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def format_dir_timestamp(now: Optional[datetime] = None) -> str:
    """Format a timestamp as ``YYYY-MM-DD-HH-mm-ss`` (UTC, seconds precision).

    Example:
        >>> format_dir_timestamp(datetime(2024, 3, 5, 7, 8, 9, 123456))
        '2024-03-05-07-08-09'
    """
    return utc_now(now).strftime('%Y-%m-%d-%H-%M-%S')


def format_archive_timestamp(now: Optional[datetime] = None) -> str:
    """Format a timestamp for archive names.

    The UTC ISO-8601 form with milliseconds (``2024-03-05T07:08:09.123Z``)
    with every ``:`` and ``.`` replaced by ``-``.

    Example:
        >>> format_archive_timestamp(datetime(2024, 3, 5, 7, 8, 9, 123456))
        '2024-03-05T07-08-09-123Z'
    """
    stamp = utc_now(now)
    iso = stamp.strftime('%Y-%m-%dT%H:%M:%S') + f".{stamp.microsecond // 1000:03d}Z"
    return re.sub(r'[:.]', '-', iso)
