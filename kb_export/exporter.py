"""High-level export workflow.

This module provides the export directory helpers and the
KnowledgeBaseExporter class, which drives a KnowledgeBaseClient through one
complete run: prepare directories, page through every document, write one file
per successfully indexed document and finally zip the plain-text exports.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from .archive import create_zip_of_exported_docs
from .client import KnowledgeBaseClient
from .config import DEFAULT_EXPORT_ROOT, ExportConfig
from .exceptions import ApiRequestError, ExportWriteError, KbExportException
from .formatters import format_document
from .helpers import format_dir_timestamp, safe_output_path, sanitize_file_name, utc_now
from .models import DocumentPage, DocumentSummary, ExportResult, ExportRun
from .session import Session

ZIP_DIR_NAME = "zip"

log = logging.getLogger(__name__)


def create_datetime_subdir(export_root: Union[str, Path] = DEFAULT_EXPORT_ROOT,
                           now: Optional[datetime] = None) -> Path:
    """Create ``<export_root>/<YYYY-MM-DD-HH-mm-ss>`` (parents included).

    An existing directory with the same name is reused.

    Raises:
        ExportWriteError: If the directory cannot be created
    """
    sub_dir = Path(export_root) / format_dir_timestamp(now)
    try:
        sub_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error(f"Failed to create export directory {sub_dir}: {e}")
        raise ExportWriteError(f"Failed to create export directory {sub_dir}: {e}") from e
    log.info(f"Created subdirectory: {sub_dir}")
    return sub_dir


def ensure_zip_dir(sub_dir: Union[str, Path]) -> Path:
    """Create ``<sub_dir>/zip`` if missing and return it.

    Raises:
        ExportWriteError: If the directory cannot be created
    """
    zip_dir = Path(sub_dir) / ZIP_DIR_NAME
    try:
        zip_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error(f"Failed to create zip directory {zip_dir}: {e}")
        raise ExportWriteError(f"Failed to create zip directory {zip_dir}: {e}") from e
    log.info(f"Created zip directory: {zip_dir}")
    return zip_dir


class KnowledgeBaseExporter:
    """Exports every successfully indexed document of a knowledge base.

    Example:
        async with KnowledgeBaseClient(session.base_url, session.api_key) as client:
            exporter = KnowledgeBaseExporter(client, export_root="exports")
            result = await exporter.run()
            if not result.ok:
                print(result.error)
    """

    def __init__(self, client: KnowledgeBaseClient,
                 export_root: Union[str, Path] = DEFAULT_EXPORT_ROOT,
                 clock: Optional[Callable[[], datetime]] = None):
        """Initialize the exporter.

        Args:
            client: Client used for listing and content requests
            export_root: Directory under which the timestamped run directory is created
            clock: Returns the current time; used for directory and archive names
        """
        self.client = client
        self.export_root = Path(export_root)
        self._clock = clock or utc_now

    @classmethod
    def from_session(cls, session: Session, config: Optional[ExportConfig] = None) -> "KnowledgeBaseExporter":
        """Build an exporter (and its client) from a prompted session."""
        config = config or ExportConfig()
        client = KnowledgeBaseClient(
            session.base_url,
            session.api_key,
            timeout=config.timeout,
            page_size=config.page_size,
        )
        return cls(client, export_root=config.export_root)

    def prepare_run(self) -> ExportRun:
        sub_dir = create_datetime_subdir(self.export_root, self._clock())
        zip_dir = ensure_zip_dir(sub_dir)
        return ExportRun(sub_dir=sub_dir, zip_dir=zip_dir)

    async def process_doc(self, doc: DocumentSummary, sub_dir: Path) -> Path:
        """Fetch, format and write one document.

        Returns:
            Path of the written file (an existing file is overwritten)

        Raises:
            ApiRequestError: If the listing entry lacks its id or name, or the
                content request fails
            ExportWriteError: If the file cannot be written
        """
        try:
            doc.check_exportable()
        except ValueError as e:
            log.error(f"Unexpected document list entry: {e}")
            raise ApiRequestError(f"Unexpected document list entry: {e}") from e

        content = await self.client.fetch_doc_content(doc.document_id)
        text, extension = format_document(doc.type, content.chunks)

        file_path = safe_output_path(sub_dir, sanitize_file_name(doc.name), extension)
        try:
            file_path.write_text(text, encoding='utf-8')
        except OSError as e:
            log.error(f"Failed to write {file_path} for document {doc.document_id}: {e}")
            raise ExportWriteError(f"Failed to write {file_path} for document {doc.document_id}: {e}") from e
        log.info(f"Created file: {file_path}")
        return file_path

    async def export_page(self, page: DocumentPage, sub_dir: Path, result: ExportResult) -> None:
        """Process the documents of one listing page in order."""
        for doc in page.documents:
            if not doc.is_success:
                log.debug(f"Skipping document {doc.document_id} ({doc.name!r}): status {doc.status}")
                result.skipped += 1
                continue
            result.files.append(await self.process_doc(doc, sub_dir))

    async def run(self) -> ExportResult:
        """Run a complete export.

        Stops at the first failure; the failure is returned on
        ``ExportResult.error`` instead of being raised.
        """
        result = ExportResult()
        try:
            result.run = self.prepare_run()
            async for page_number, page in self.client.iter_docs():
                result.pages_fetched = page_number
                await self.export_page(page, result.run.sub_dir, result)

            log.info(f"Exported {len(result.files)} document(s) from {result.pages_fetched} page(s), "
                     f"skipped {result.skipped}")
            result.archive_path = create_zip_of_exported_docs(
                result.run.sub_dir, result.run.zip_dir, self._clock()
            )
        except KbExportException as e:
            log.error(f"Export stopped: {e}")
            result.error = e
        return result
