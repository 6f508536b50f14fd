"""
Local filesystem storage for verification documents.

Documents are never served statically. The stored name is random and its
extension comes from the validated content type, so a client-chosen
filename can never decide how the file is later rendered.
"""

import asyncio
import re
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

from app.application.ports import DocumentStoragePort, StoredDocument
from app.domain_core.exceptions import ValidationError
from app.infra.config.settings import Settings
from app.infra.config.logging_config import get_logger

DOCUMENT_FOLDER = "verification_documents"

# Content type -> stored extension
ALLOWED_DOCUMENT_TYPES = {
    "application/pdf": ".pdf",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
}
_MEDIA_TYPES = {ext: content_type for content_type, ext in ALLOWED_DOCUMENT_TYPES.items()}

_STORED_NAME = re.compile(r"^[0-9a-f]{32}\.(pdf|png|jpg|webp)$")


def normalize_content_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_allowed_content_type(content_type: Optional[str]) -> bool:
    return normalize_content_type(content_type) in ALLOWED_DOCUMENT_TYPES


class LocalDocumentStorage(DocumentStoragePort):
    def __init__(self, root_dir: str, base_url: str, max_bytes: int = 5 * 1024 * 1024):
        self.root_dir = Path(root_dir)
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes
        self._log = get_logger("storage.documents")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalDocumentStorage":
        return cls(
            root_dir=settings.upload_dir,
            base_url=settings.upload_base_url,
            max_bytes=settings.max_upload_bytes,
        )

    @property
    def folder(self) -> Path:
        return self.root_dir / DOCUMENT_FOLDER

    async def store(
        self, owner_id: UUID, filename: str, content_type: str, content: bytes
    ) -> str:
        media_type = normalize_content_type(content_type)
        if media_type not in ALLOWED_DOCUMENT_TYPES:
            raise ValidationError(
                "Invalid file type. Only PDF, PNG, JPEG and WebP documents are allowed."
            )
        if not content:
            raise ValidationError("Uploaded document is empty.")
        if len(content) > self.max_bytes:
            raise ValidationError(
                f"File size exceeds maximum allowed size of {self.max_bytes // (1024 * 1024)}MB"
            )

        name = f"{uuid4().hex}{ALLOWED_DOCUMENT_TYPES[media_type]}"

        # Disk I/O off the event loop
        await asyncio.to_thread(_write_file, self.folder / name, content)

        url = f"{self.base_url}/{name}"
        self._log.info(
            "document.stored",
            owner_id=str(owner_id),
            size=len(content),
            media_type=media_type,
            client_filename=filename,
            url=url,
        )
        return url

    async def load(self, name: str) -> Optional[StoredDocument]:
        if not _STORED_NAME.match(name):
            return None
        path = self.folder / name
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            self._log.warning("document.missing", name=name)
            return None
        return StoredDocument(
            name=name, content_type=_MEDIA_TYPES[path.suffix], content=content
        )


def _write_file(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
