"""Identification document storage.

Uploaded blobs are written under `settings.document_storage_dir` as
`<owner_id>/<uuid><ext>`; that relative path is the opaque reference the
client sends back as `document_reference` in the identification step.
Only PDF, PNG and JPEG are accepted, checked by declared content type,
file extension and the file's leading bytes.
A reference is only accepted in the identification step when it names an
existing upload under the caller's own directory.
"""

import asyncio
import logging
import uuid
from pathlib import Path

from snapaml.config import settings
from snapaml.middleware.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIMES = {"application/pdf", "image/jpeg", "image/png"}
MIME_EXTENSIONS = {
    "application/pdf": {".pdf"},
    "image/jpeg": {".jpg", ".jpeg"},
    "image/png": {".png"},
}
MAGIC_PREFIXES = {
    "application/pdf": (b"%PDF",),
    "image/jpeg": (b"\xff\xd8\xff",),
    "image/png": (b"\x89PNG\r\n\x1a\n",),
}


def validate_document(
    filename: str | None,
    content_type: str | None,
    content: bytes,
    max_bytes: int | None = None,
) -> str:
    """Check an upload and return the extension to store it under.

    Raises:
        ValidationError: empty, oversized, or not a PDF/PNG/JPEG
    """
    max_bytes = max_bytes or settings.max_document_bytes
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB",
            details={"max_bytes": max_bytes, "size": len(content)},
        )

    if content_type not in ALLOWED_MIMES:
        raise ValidationError(
            f"Unsupported file type: {content_type}. Allowed: PDF, JPEG, PNG"
        )

    extension = Path(filename or "").suffix.lower()
    if extension not in MIME_EXTENSIONS[content_type]:
        raise ValidationError(f"File extension '{extension}' does not match {content_type}")

    if not content.startswith(MAGIC_PREFIXES[content_type]):
        raise ValidationError("File content does not match its declared type")

    return extension


class DocumentStorage:
    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, reference: str) -> Path:
        return self.root / reference

    async def save(
        self,
        owner_id: str,
        filename: str | None,
        content_type: str | None,
        content: bytes,
    ) -> str:
        """Validate and persist a document; return its reference."""
        extension = validate_document(filename, content_type, content)
        reference = f"{owner_id}/{uuid.uuid4()}{extension}"
        path = self.path_for(reference)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        await asyncio.to_thread(_write)
        logger.info("Stored %s (%d bytes) for user %s", reference, len(content), owner_id)
        return reference

    async def require_owned(self, owner_id: str, reference: str) -> None:
        """Ensure `reference` is a stored upload belonging to `owner_id`.

        Raises:
            ValidationError: foreign, malformed or missing reference
        """
        path = self.path_for(reference).resolve()
        owned = (
            reference.startswith(f"{owner_id}/")
            and path.parent == (self.root / owner_id).resolve()
        )
        if not owned or not await asyncio.to_thread(path.is_file):
            logger.warning("Rejected document reference %r for user %s", reference, owner_id)
            raise ValidationError(
                "Document upload is required",
                details={"field": "documentReference"},
            )


def get_document_storage() -> DocumentStorage:
    return DocumentStorage(settings.document_storage_dir)
