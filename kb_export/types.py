"""Shared typing helpers used across the kb_export package.

This module centralizes JSON-like typings and the typed dictionaries that
describe the knowledge-base API payloads, so other modules can import
concrete types rather than using unstructured Any in many places.
"""
from __future__ import annotations

from typing import Dict, List, Union, TypedDict


# Recursive JSON-ish type used for payloads / returned JSON values
JSONType = Union[Dict[str, "JSONType"], List["JSONType"], str, int, float, bool, None]

# A chunk keeps whatever fields the server sends; only "content" and "chunkID" are known.
Chunk = Dict[str, JSONType]


class DocumentStatusPayload(TypedDict, total=False):
    type: str


class DocumentDataPayload(TypedDict, total=False):
    type: str
    name: str


class DocumentSummaryPayload(TypedDict, total=False):
    """One entry of the ``data`` list returned by ``GET /docs``."""
    documentID: str
    status: DocumentStatusPayload
    data: DocumentDataPayload


class DocumentListPayload(TypedDict, total=False):
    total: int
    data: List[DocumentSummaryPayload]


class DocumentContentPayload(TypedDict, total=False):
    chunks: List[Chunk]
