"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deploy bundle small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.

Surface used by the repositories:
- document get/set/update/delete
- collection create/where/stream, chained where() filters (AND), order/limit
- client.batch_write(): atomic commit of several set/update/delete writes
- stream_all(): every result of an ordered query, fetched page by page
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
    encode_fields,
)
from app.shared.utils.generators import generate_cuid

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_LIST_PAGE_SIZE = 300

# Firestore rejects commits with more writes than this.
MAX_BATCH_WRITES = 500
# Page size for stream_all.
QUERY_PAGE_SIZE = 500


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict | list | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers, params=params)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body, params=params)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body, params=params)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers, params=params)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError("Document already exists")
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentExistsError(Exception):
    """Raised when createDocument returns 409 (document ID already exists)."""


class DocumentMissingError(Exception):
    """Raised when update() targets a document that does not exist."""


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/coll/id)."""
        return self._path

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Merge the given top-level fields into an existing document.

        Raises:
            DocumentMissingError: The document does not exist.
        """
        url = f"{_BASE}/{self._path}"
        params = [("updateMask.fieldPaths", k) for k in data]
        params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client._http,
            url,
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
        )
        if out is None:
            raise DocumentMissingError(f"Document not found: {self._path}")

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{_BASE}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains_any": "ARRAY_CONTAINS_ANY",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}


def _field_filter(field: str, op: str, value: Any) -> dict[str, Any]:
    if field == "__name__":
        # Document-id filters compare full resource names as references.
        refs = value if isinstance(value, (list, tuple)) else [value]
        encoded_refs = [{"referenceValue": r} for r in refs]
        encoded = (
            {"arrayValue": {"values": encoded_refs}}
            if isinstance(value, (list, tuple))
            else encoded_refs[0]
        )
    else:
        encoded = _encode_value(value)
    return {
        "fieldFilter": {
            "field": {"fieldPath": field},
            "op": _OP_MAP.get(op, op),
            "value": encoded,
        }
    }


class _Query:
    """Fluent query builder; runs via runQuery (filters AND-ed, order/offset/limit on server)."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._offset: int = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "_Query":
        self._filters.append(_field_filter(field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def offset(self, n: int) -> "_Query":
        self._offset = n
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        """Return the runQuery structuredQuery body for the current builder state."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._offset:
            structured["offset"] = self._offset
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        url = f"{_BASE}/{self._parent}:runQuery"
        body = {"structuredQuery": self.to_structured_query()}
        resp = await _request_async(
            self._client._http,
            url,
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            doc_id = name.split("/")[-1] if name else ""
            yield DocumentSnapshot(doc_id, decode_document(doc.get("fields")))



async def stream_all(
    query: _Query, page_size: int = QUERY_PAGE_SIZE
) -> AsyncIterator[DocumentSnapshot]:
    """Yield every result of an ordered query, one runQuery call per page.

    The query must carry an order_by so pages do not overlap. Its offset
    and limit are overwritten.
    """
    offset = 0
    while True:
        fetched = 0
        async for snapshot in query.offset(offset).limit(page_size).stream():
            fetched += 1
            yield snapshot
        if fetched < page_size:
            return
        offset += fetched


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    def document(self, document_id: str | None = None) -> DocumentReference:
        """Reference a document; a new CUID is used when no id is given."""
        return DocumentReference(
            self._client, f"{self._path}/{document_id or generate_cuid()}"
        )

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        url = f"{_BASE}/{self._path}?documentId={quote(document_id, safe='')}"
        await _request_async(
            self._client._http,
            url,
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where(), .order_by(), .limit(), then .stream()."""
        parent = self._path.rsplit("/", 1)[0]
        return _Query(self._client, parent, self.id).where(field, op, value)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following page tokens."""
        url = f"{_BASE}/{self._path}"
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": _LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                url,
                access_token=await self._client.get_token(),
                params=params,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                doc_id = name.split("/")[-1] if name else ""
                yield DocumentSnapshot(doc_id, decode_document(doc.get("fields")))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def _to_write(self, write: dict[str, Any]) -> dict[str, Any]:
        name = f"{self._prefix}/{write['path']}"
        if write.get("delete"):
            return {"delete": name}
        out: dict[str, Any] = {"update": {"name": name, "fields": encode_fields(write["data"])}}
        if write.get("merge"):
            out["updateMask"] = {"fieldPaths": list(write["data"])}
            out["currentDocument"] = {"exists": True}
        return out

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Commit writes atomically (all applied or none).

        Each write is {"path": "collection/doc_id", "data": {...}} for a full
        set, the same with "merge": True to update only the given fields of an
        existing document, or {"path": ..., "delete": True}.
        """
        if not writes:
            return
        if len(writes) > MAX_BATCH_WRITES:
            raise ValueError(
                f"Batch of {len(writes)} writes exceeds the {MAX_BATCH_WRITES}-write commit limit"
            )
        url = f"{_BASE}/{self._prefix}:commit"
        await _request_async(
            self._http,
            url,
            method="POST",
            body={"writes": [self._to_write(w) for w in writes]},
            access_token=await self.get_token(),
        )
