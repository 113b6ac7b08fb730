"""Turn document chunks into file contents.

Each DocumentType has its own formatter so a type can get dedicated parsing
later without touching the others. URL and GENERIC currently behave the same.
"""

import json
from typing import Callable, Dict, List, Tuple

from .models import DocumentType
from .types import Chunk

CHUNK_ID_FIELD = "chunkID"

Formatter = Callable[[List[Chunk]], str]


def format_table_content(chunks: List[Chunk]) -> str:
    """Serialize table chunks as indented JSON without their chunk identifiers."""
    sanitized = [{k: v for k, v in chunk.items() if k != CHUNK_ID_FIELD} for chunk in chunks]
    return json.dumps(sanitized, indent=2, ensure_ascii=False)


def _chunk_text(chunk: Chunk) -> str:
    content = chunk.get("content")
    return "" if content is None else str(content)


def _join_content(chunks: List[Chunk]) -> str:
    return '\n'.join(_chunk_text(chunk) for chunk in chunks)


def format_url_content(chunks: List[Chunk]) -> str:
    """One line of text per chunk, in chunk order."""
    return _join_content(chunks)


def format_content(chunks: List[Chunk]) -> str:
    """Fallback for every other document type."""
    return _join_content(chunks)


_FORMATTERS: Dict[DocumentType, Tuple[Formatter, str]] = {
    DocumentType.TABLE: (format_table_content, ".json"),
    DocumentType.URL: (format_url_content, ".txt"),
    DocumentType.GENERIC: (format_content, ".txt"),
}


def format_document(doc_type: DocumentType, chunks: List[Chunk]) -> Tuple[str, str]:
    """Format chunks for ``doc_type``.

    Returns:
        ``(text, extension)`` where extension is ".json" for tables and ".txt"
        otherwise
    """
    formatter, extension = _FORMATTERS[doc_type]
    return formatter(chunks), extension
