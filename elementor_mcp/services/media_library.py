"""
Media Library Abstraction

Holds uploaded files (sideloaded images, SVG icons) and hands out
attachment ids and URLs that widget settings can reference.

Two backends:
- InMemoryMediaLibrary: process-local, for tests and ephemeral sessions
- LocalMediaLibrary: files under a directory, one folder per attachment
"""

import asyncio
import itertools
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from elementor_mcp.core.exceptions import NotFoundError, UpstreamFailureError
from elementor_mcp.models.contracts.media import MediaAttachment

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str, fallback: str = "file") -> str:
    """Filename reduced to letters, digits, dots, dashes and underscores."""
    cleaned = UNSAFE_FILENAME_CHARS.sub("-", filename).strip(".-")
    return cleaned or fallback


class MediaLibrary(ABC):
    """Abstract media library."""

    @abstractmethod
    async def add(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        title: str = "",
        alt_text: str = "",
        caption: str = "",
    ) -> MediaAttachment:
        """Store a file and return its attachment."""
        ...

    @abstractmethod
    async def get(self, attachment_id: int) -> MediaAttachment:
        """Attachment metadata. Raises NotFoundError."""
        ...

    @abstractmethod
    async def read(self, attachment_id: int) -> bytes:
        """File content. Raises NotFoundError."""
        ...


# =============================================================================
# In-memory backend
# =============================================================================


class InMemoryMediaLibrary(MediaLibrary):
    """Files held in process memory under ``memory://media/<id>/<filename>`` URLs."""

    def __init__(self):
        self._attachments: dict[int, MediaAttachment] = {}
        self._content: dict[int, bytes] = {}
        self._ids = itertools.count(1)

    async def add(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        title: str = "",
        alt_text: str = "",
        caption: str = "",
    ) -> MediaAttachment:
        attachment_id = next(self._ids)
        filename = sanitize_filename(filename)
        attachment = MediaAttachment(
            id=attachment_id,
            url=f"memory://media/{attachment_id}/{filename}",
            filename=filename,
            mime_type=mime_type,
            title=title,
            alt_text=alt_text,
            caption=caption,
        )
        self._attachments[attachment_id] = attachment
        self._content[attachment_id] = bytes(content)
        return attachment.model_copy()

    async def get(self, attachment_id: int) -> MediaAttachment:
        attachment = self._attachments.get(attachment_id)
        if attachment is None:
            raise NotFoundError(f"Attachment {attachment_id} not found")
        return attachment.model_copy()

    async def read(self, attachment_id: int) -> bytes:
        await self.get(attachment_id)
        return self._content[attachment_id]


# =============================================================================
# Local directory backend
# =============================================================================


class LocalMediaLibrary(MediaLibrary):
    """
    ``<root>/<id>/<filename>`` plus ``<root>/<id>/attachment.json``.

    URLs are ``<base_url>/<id>/<filename>`` when a base URL is configured,
    file URIs otherwise. File I/O runs in a worker thread.
    """

    METADATA_FILE = "attachment.json"

    def __init__(self, root: Path, base_url: str = ""):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url.rstrip("/")
        self._add_lock = asyncio.Lock()

    def _folder(self, attachment_id: int) -> Path:
        return self.root / str(int(attachment_id))

    def _url(self, path: Path, attachment_id: int) -> str:
        if self.base_url:
            return f"{self.base_url}/{attachment_id}/{path.name}"
        return path.resolve().as_uri()

    def _next_id(self) -> int:
        ids = [int(p.name) for p in self.root.iterdir() if p.is_dir() and p.name.isdigit()]
        return max(ids, default=0) + 1

    def _add(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        title: str,
        alt_text: str,
        caption: str,
    ) -> MediaAttachment:
        attachment_id = self._next_id()
        folder = self._folder(attachment_id)
        path = folder / sanitize_filename(filename)
        try:
            folder.mkdir()
            path.write_bytes(content)
            attachment = MediaAttachment(
                id=attachment_id,
                url=self._url(path, attachment_id),
                filename=path.name,
                mime_type=mime_type,
                title=title,
                alt_text=alt_text,
                caption=caption,
            )
            (folder / self.METADATA_FILE).write_text(
                attachment.model_dump_json(indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise UpstreamFailureError(f"Cannot store media file {path.name}: {e}") from e
        logger.debug(f"Stored attachment {attachment_id} at {path}")
        return attachment

    def _get(self, attachment_id: int) -> MediaAttachment:
        metadata = self._folder(attachment_id) / self.METADATA_FILE
        if not metadata.exists():
            raise NotFoundError(f"Attachment {attachment_id} not found")
        try:
            return MediaAttachment.model_validate_json(metadata.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise UpstreamFailureError(f"Cannot read attachment {attachment_id}: {e}") from e

    def _read(self, attachment_id: int) -> bytes:
        attachment = self._get(attachment_id)
        try:
            return (self._folder(attachment_id) / attachment.filename).read_bytes()
        except OSError as e:
            raise UpstreamFailureError(f"Cannot read attachment {attachment_id}: {e}") from e

    async def add(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        title: str = "",
        alt_text: str = "",
        caption: str = "",
    ) -> MediaAttachment:
        async with self._add_lock:
            return await asyncio.to_thread(
                self._add, content, filename, mime_type, title, alt_text, caption
            )

    async def get(self, attachment_id: int) -> MediaAttachment:
        return await asyncio.to_thread(self._get, attachment_id)

    async def read(self, attachment_id: int) -> bytes:
        return await asyncio.to_thread(self._read, attachment_id)
