"""Data models for knowledge-base documents and export runs.

Parsing helpers raise ``TypeError`` for payloads that are not JSON objects and
``ValueError`` for objects missing the fields the exporter relies on. Anything
else the server sends is kept untouched in ``raw``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import KbExportException
from .types import Chunk

SUCCESS_STATUS = "SUCCESS"


def _as_mapping(data: Union[str, Mapping[str, Any]], what: str) -> Mapping[str, Any]:
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"{what} is not valid JSON: {e}") from e
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


class DocumentType(Enum):
    """Document classification driving how chunks are written out."""

    TABLE = "table"
    URL = "url"
    GENERIC = "generic"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "DocumentType":
        """Map the API's ``data.type`` string; unknown types are GENERIC."""
        if value == cls.TABLE.value:
            return cls.TABLE
        if value == cls.URL.value:
            return cls.URL
        return cls.GENERIC


@dataclass(frozen=True)
class DocumentSummary:
    """One listing entry.

    Only ``status`` is read from every entry. ``document_id`` and ``name`` are
    needed just for SUCCESS documents, so they are checked by
    ``check_exportable`` when such a document is exported, not at parse time.
    """

    document_id: Optional[str]
    status: Optional[str]
    type: DocumentType
    name: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS

    def check_exportable(self) -> None:
        """Raise ``ValueError`` if this entry lacks what an export needs."""
        if not self.document_id:
            raise ValueError("Document summary is missing 'documentID'")
        if self.name is None:
            raise ValueError(f"Document {self.document_id} is missing 'data.name'")

    @classmethod
    def from_json(cls, data: Union[str, Mapping[str, Any]]) -> "DocumentSummary":
        obj = _as_mapping(data, "Document summary")
        document_id = obj.get("documentID")

        status = obj.get("status")
        if not isinstance(status, Mapping):
            status = {}

        meta = obj.get("data")
        if not isinstance(meta, Mapping):
            meta = {}
        name = meta.get("name")

        return cls(
            document_id=str(document_id) if document_id else None,
            status=status.get("type"),
            type=DocumentType.from_value(meta.get("type")),
            name=name if isinstance(name, str) else None,
            raw=dict(obj),
        )


@dataclass(frozen=True)
class DocumentPage:
    """One page of the paginated document listing."""

    page: int
    total: int
    documents: List[DocumentSummary]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: Union[str, Mapping[str, Any]], page: int = 1) -> "DocumentPage":
        obj = _as_mapping(data, "Document list")
        if "total" not in obj:
            raise ValueError("Document list is missing 'total'")
        try:
            total = int(obj["total"])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Document list has a non-integer 'total': {obj['total']!r}") from e

        entries = obj.get("data")
        if not isinstance(entries, list):
            raise ValueError("Document list is missing 'data'")

        return cls(
            page=page,
            total=total,
            documents=[DocumentSummary.from_json(entry) for entry in entries],
            raw=dict(obj),
        )


@dataclass(frozen=True)
class DocumentContent:
    document_id: str
    chunks: List[Chunk]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: Union[str, Mapping[str, Any]], document_id: str = "") -> "DocumentContent":
        obj = _as_mapping(data, "Document content")
        chunks = obj.get("chunks")
        if not isinstance(chunks, list):
            raise ValueError(f"Document content for {document_id or '?'} is missing 'chunks'")
        for chunk in chunks:
            if not isinstance(chunk, Mapping):
                raise TypeError(f"Chunk must be a JSON object, got {type(chunk).__name__}")
        return cls(document_id=document_id, chunks=[dict(c) for c in chunks], raw=dict(obj))


@dataclass(frozen=True)
class ExportRun:
    """Directories of one export run: the timestamped directory and its ``zip/`` child."""

    sub_dir: Path
    zip_dir: Path


@dataclass
class ExportResult:
    """Outcome of ``KnowledgeBaseExporter.run``.

    ``error`` holds the first failure; the run stopped right after it, so
    ``files`` lists only what was written before that point.
    """

    run: Optional[ExportRun] = None
    files: List[Path] = field(default_factory=list)
    archive_path: Optional[Path] = None
    pages_fetched: int = 0
    skipped: int = 0
    error: Optional[KbExportException] = None

    @property
    def ok(self) -> bool:
        return self.error is None
