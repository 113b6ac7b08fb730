"""Knowledge-base API client.

This module provides the KnowledgeBaseClient class that wraps the two
read-only endpoints the exporter needs:

 - GET {base}/docs?page={n}&limit={page_size}  (paginated document listing)
 - GET {base}/docs/{documentID}                 (chunks of one document)

Both authenticate with the raw API key in the Authorization header. There is
no retry: any failure raises ApiRequestError straight away.
"""
from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict, Optional, Tuple, Union
from urllib.parse import quote

import aiohttp

from .exceptions import ApiRequestError
from .models import DocumentContent, DocumentPage
from .types import DocumentContentPayload, DocumentListPayload

DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30.0

log = logging.getLogger(__name__)


class KnowledgeBaseClient:
    """Client for the knowledge-base REST API.

    Example:
        async with KnowledgeBaseClient(session.base_url, session.api_key) as client:
            async for page_number, page in client.iter_docs():
                for doc in page.documents:
                    content = await client.fetch_doc_content(doc.document_id)
    """

    def __init__(self, base_url: str, api_key: str, *, timeout: float = DEFAULT_TIMEOUT,
                 ssl: Union[bool, Any, None] = None, page_size: int = DEFAULT_PAGE_SIZE):
        """Initialize the client.

        Args:
            base_url: Knowledge-base base URL (https://api.<domain>/v1/knowledge-base)
            api_key: API key sent verbatim in the Authorization header
            timeout: Total timeout per request in seconds
            ssl: Passed to aiohttp.TCPConnector (False disables verification,
                an ssl.SSLContext pins certificates, None keeps the default)
            page_size: Documents requested per listing page
        """
        if not base_url.lower().startswith("https://"):
            raise ValueError(f"HTTPS is required for the knowledge-base API, got {base_url!r}")
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.page_size = page_size
        self._ssl = ssl
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "KnowledgeBaseClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_session(self) -> None:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl) if self._ssl is not None else None
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": self.api_key}

    # -------------------------
    # HTTP helper
    # -------------------------
    async def _make_api_request(self, method: str, endpoint: str,
                                params: Optional[Dict[str, Any]] = None) -> Any:
        """Make an API request and return the decoded JSON body.

        Raises:
            ApiRequestError: On transport errors, non-2xx responses or a body
                that is not JSON
        """
        url = self.base_url + endpoint
        await self._ensure_session()
        try:
            async with self._session.request(method, url, params=params, headers=self._headers()) as resp:
                resp.raise_for_status()
                log.debug(f"{endpoint} response - status: {resp.status}, content-type: {resp.content_type}")
                # force JSON parsing even if the content-type header is off
                return await resp.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            log.error(f"API request failed for {endpoint}: HTTP {e.status} {e.message}")
            raise ApiRequestError(f"API request failed for {endpoint}: HTTP {e.status} {e.message}") from e
        except aiohttp.ClientError as e:
            log.error(f"API request failed for {endpoint}: {e}")
            raise ApiRequestError(f"API request failed for {endpoint}: {e}") from e
        except (ValueError, json.JSONDecodeError) as e:
            log.error(f"Failed to parse server response for {endpoint}: {e}")
            raise ApiRequestError(f"Failed to parse server response for {endpoint}: {e}") from e

    # -------------------------
    # Documents
    # -------------------------
    async def fetch_docs(self, page: int = 1) -> DocumentPage:
        """Fetch one page of the document listing.

        Args:
            page: 1-based page number

        Returns:
            DocumentPage with the server's current ``total`` and the entries
            of this page in listing order

        Raises:
            ApiRequestError: If the request fails or the body lacks total/data
        """
        log.debug(f"Fetching document list page {page} (limit={self.page_size})")
        payload: DocumentListPayload = await self._make_api_request(
            "GET", "/docs", {"page": page, "limit": self.page_size}
        )
        try:
            result = DocumentPage.from_json(payload, page=page)
        except (TypeError, ValueError) as e:
            log.error(f"Unexpected document list shape on page {page}: {e}")
            raise ApiRequestError(f"Unexpected document list shape on page {page}: {e}") from e
        log.info(f"Page {page}: {len(result.documents)} documents (total reported: {result.total})")
        return result

    async def fetch_doc_content(self, document_id: str) -> DocumentContent:
        """Fetch the ordered content chunks of one document.

        Raises:
            ApiRequestError: If the request fails or the body has no chunks list
        """
        endpoint = f"/docs/{quote(document_id, safe='')}"
        payload: DocumentContentPayload = await self._make_api_request("GET", endpoint)
        try:
            content = DocumentContent.from_json(payload, document_id=document_id)
        except (TypeError, ValueError) as e:
            log.error(f"Unexpected content shape for document {document_id}: {e}")
            raise ApiRequestError(f"Unexpected content shape for document {document_id}: {e}") from e
        log.debug(f"Document {document_id}: {len(content.chunks)} chunks")
        return content

    async def iter_docs(self) -> AsyncIterator[Tuple[int, DocumentPage]]:
        """Yield ``(page_number, DocumentPage)`` until every page is consumed.

        Page 1 is always requested. Another page follows while
        ``(page - 1) * page_size < total``, with ``total`` taken from the most
        recent response.
        """
        page = 1
        while True:
            result = await self.fetch_docs(page)
            yield page, result
            page += 1
            if (page - 1) * self.page_size >= result.total:
                break
