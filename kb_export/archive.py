"""Zip archive of the exported plain-text documents.

Only files whose suffix is exactly ``.txt`` are archived; ``.json`` table
exports stay next to the archive but are not part of it.
"""

import io
import logging
import zipfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .exceptions import ArchiveError
from .helpers import format_archive_timestamp

ARCHIVED_SUFFIX = ".txt"
ARCHIVE_PREFIX = "exported_docs_"

log = logging.getLogger(__name__)


def archive_name(now: Optional[datetime] = None) -> str:
    return f"{ARCHIVE_PREFIX}{format_archive_timestamp(now)}.zip"


def collect_archivable_files(sub_dir: Path) -> List[Path]:
    """Regular files directly inside ``sub_dir`` with a ``.txt`` suffix, sorted by name."""
    return sorted(
        (p for p in Path(sub_dir).iterdir() if p.is_file() and p.suffix == ARCHIVED_SUFFIX),
        key=lambda p: p.name,
    )


def build_zip_bytes(files: List[Path]) -> bytes:
    """Build the archive in memory, one entry per file keyed by its bare name."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            zf.writestr(path.name, path.read_bytes())
    return buffer.getvalue()


def create_zip_of_exported_docs(sub_dir: Path, zip_dir: Path, now: Optional[datetime] = None) -> Path:
    """Package every ``.txt`` export of ``sub_dir`` into ``zip_dir``.

    Args:
        sub_dir: Export directory holding the written documents
        zip_dir: Directory receiving the archive
        now: Timestamp used in the archive name (defaults to current UTC time)

    Returns:
        Path of the written zip file

    Raises:
        ArchiveError: If the files cannot be read or the archive cannot be written
    """
    try:
        files = collect_archivable_files(sub_dir)
        log.debug(f"Archiving {len(files)} file(s) from {sub_dir}")
        data = build_zip_bytes(files)
        zip_path = Path(zip_dir) / archive_name(now)
        zip_path.write_bytes(data)
    except (OSError, zipfile.BadZipFile) as e:
        log.error(f"Failed to build zip archive for {sub_dir}: {e}")
        raise ArchiveError(f"Failed to build zip archive for {sub_dir}: {e}") from e
    log.info(f"Created zip file: {zip_path}")
    return zip_path
