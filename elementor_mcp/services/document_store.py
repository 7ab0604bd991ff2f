"""
Document Store Abstraction

The store owns documents: their metadata, element tree and page settings.
Trees cross this boundary in wire format (lists of plain dicts); a save is
the unit of durability and replaces the whole tree.

Two backends:
- InMemoryDocumentStore: process-local, for tests and ephemeral sessions
- JsonFileDocumentStore: one JSON file per document under a directory
"""

import asyncio
import copy
import itertools
import logging
import secrets
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from elementor_mcp.core.exceptions import NotFoundError, UpstreamFailureError
from elementor_mcp.models.contracts.widgets import DocumentInfo

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Abstract document store."""

    @abstractmethod
    async def create_document(
        self,
        title: str,
        status: str = "draft",
        kind: str = "page",
        template_type: str | None = None,
    ) -> int:
        """Create an empty document and return its id."""
        ...

    @abstractmethod
    async def get_document(self, document_id: int) -> DocumentInfo:
        """Document metadata. Raises NotFoundError."""
        ...

    @abstractmethod
    async def list_documents(
        self,
        kinds: list[str] | None = None,
        status: str | None = None,
    ) -> list[DocumentInfo]:
        """Documents filtered by kind and status, most recently modified first."""
        ...

    @abstractmethod
    async def load_tree(self, document_id: int) -> list[dict[str, Any]]:
        """Root element sequence in wire format. Raises NotFoundError."""
        ...

    @abstractmethod
    async def save_tree(self, document_id: int, tree: list[dict[str, Any]]) -> None:
        """Replace the whole element tree. Raises NotFoundError."""
        ...

    @abstractmethod
    async def load_settings(self, document_id: int) -> dict[str, Any]:
        """Document-level settings. Raises NotFoundError."""
        ...

    @abstractmethod
    async def save_settings(self, document_id: int, settings: dict[str, Any]) -> None:
        """Replace the document-level settings. Raises NotFoundError."""
        ...


class StoredDocument(BaseModel):
    """Persisted shape of one document."""

    document: DocumentInfo
    tree: list[dict[str, Any]] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)


def _matches(info: DocumentInfo, kinds: list[str] | None, status: str | None) -> bool:
    if kinds and info.kind not in kinds:
        return False
    if status and status != "any" and info.status != status:
        return False
    return True


# =============================================================================
# In-memory backend
# =============================================================================


class InMemoryDocumentStore(DocumentStore):
    """Documents held in process memory; values are deep-copied in and out."""

    def __init__(self):
        self._documents: dict[int, StoredDocument] = {}
        self._ids = itertools.count(1)

    def _get(self, document_id: int) -> StoredDocument:
        stored = self._documents.get(document_id)
        if stored is None:
            raise NotFoundError(f"Document {document_id} not found")
        return stored

    async def create_document(
        self,
        title: str,
        status: str = "draft",
        kind: str = "page",
        template_type: str | None = None,
    ) -> int:
        document_id = next(self._ids)
        self._documents[document_id] = StoredDocument(
            document=DocumentInfo(
                id=document_id,
                title=title,
                status=status,
                kind=kind,
                template_type=template_type,
            )
        )
        return document_id

    async def get_document(self, document_id: int) -> DocumentInfo:
        return self._get(document_id).document.model_copy()

    async def list_documents(
        self,
        kinds: list[str] | None = None,
        status: str | None = None,
    ) -> list[DocumentInfo]:
        documents = [
            stored.document.model_copy()
            for stored in self._documents.values()
            if _matches(stored.document, kinds, status)
        ]
        return sorted(documents, key=lambda info: info.modified_at, reverse=True)

    async def load_tree(self, document_id: int) -> list[dict[str, Any]]:
        return copy.deepcopy(self._get(document_id).tree)

    async def save_tree(self, document_id: int, tree: list[dict[str, Any]]) -> None:
        stored = self._get(document_id)
        stored.tree = copy.deepcopy(tree)
        stored.document.modified_at = datetime.now()

    async def load_settings(self, document_id: int) -> dict[str, Any]:
        return copy.deepcopy(self._get(document_id).settings)

    async def save_settings(self, document_id: int, settings: dict[str, Any]) -> None:
        stored = self._get(document_id)
        stored.settings = copy.deepcopy(settings)
        stored.document.modified_at = datetime.now()


# =============================================================================
# JSON file backend
# =============================================================================


class JsonFileDocumentStore(DocumentStore):
    """
    One ``<id>.json`` file per document.

    File I/O runs in a worker thread. Concurrent saves to the same document
    are last-write-wins; creates are serialized so every new document gets
    its own id.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._create_lock = asyncio.Lock()

    def _path(self, document_id: int) -> Path:
        return self.root / f"{int(document_id)}.json"

    def _read(self, document_id: int) -> StoredDocument:
        path = self._path(document_id)
        if not path.exists():
            raise NotFoundError(f"Document {document_id} not found")
        try:
            return StoredDocument.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise UpstreamFailureError(f"Cannot read document {document_id}: {e}") from e

    def _write(self, stored: StoredDocument) -> None:
        path = self._path(stored.document.id)
        tmp_path = path.with_name(f".{path.name}.{secrets.token_hex(4)}.tmp")
        try:
            tmp_path.write_text(stored.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise UpstreamFailureError(
                f"Cannot write document {stored.document.id}: {e}"
            ) from e

    def _next_id(self) -> int:
        ids = [int(p.stem) for p in self.root.glob("*.json") if p.stem.isdigit()]
        return max(ids, default=0) + 1

    def _create(self, title: str, status: str, kind: str, template_type: str | None) -> int:
        document_id = self._next_id()
        self._write(
            StoredDocument(
                document=DocumentInfo(
                    id=document_id,
                    title=title,
                    status=status,
                    kind=kind,
                    template_type=template_type,
                )
            )
        )
        logger.debug(f"Created document {document_id} at {self._path(document_id)}")
        return document_id

    def _list(self, kinds: list[str] | None, status: str | None) -> list[DocumentInfo]:
        documents = []
        for path in self.root.glob("*.json"):
            if not path.stem.isdigit():
                continue
            info = self._read(int(path.stem)).document
            if _matches(info, kinds, status):
                documents.append(info)
        return sorted(documents, key=lambda info: info.modified_at, reverse=True)

    def _update(self, document_id: int, **changes: Any) -> None:
        stored = self._read(document_id)
        for key, value in changes.items():
            setattr(stored, key, value)
        stored.document.modified_at = datetime.now()
        self._write(stored)

    async def create_document(
        self,
        title: str,
        status: str = "draft",
        kind: str = "page",
        template_type: str | None = None,
    ) -> int:
        async with self._create_lock:
            return await asyncio.to_thread(self._create, title, status, kind, template_type)

    async def get_document(self, document_id: int) -> DocumentInfo:
        stored = await asyncio.to_thread(self._read, document_id)
        return stored.document

    async def list_documents(
        self,
        kinds: list[str] | None = None,
        status: str | None = None,
    ) -> list[DocumentInfo]:
        return await asyncio.to_thread(self._list, kinds, status)

    async def load_tree(self, document_id: int) -> list[dict[str, Any]]:
        stored = await asyncio.to_thread(self._read, document_id)
        return stored.tree

    async def save_tree(self, document_id: int, tree: list[dict[str, Any]]) -> None:
        await asyncio.to_thread(self._update, document_id, tree=tree)

    async def load_settings(self, document_id: int) -> dict[str, Any]:
        stored = await asyncio.to_thread(self._read, document_id)
        return stored.settings

    async def save_settings(self, document_id: int, settings: dict[str, Any]) -> None:
        await asyncio.to_thread(self._update, document_id, settings=settings)
