"""
File storage service for uploaded media and documents.

Each upload route declares an ``UploadPolicy`` (form field, subdirectory,
filename prefix, allowed extensions/mime types and size ceiling). Files are
streamed to disk in chunks; a rejected or failed upload leaves nothing behind.
"""
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional

from fastapi import UploadFile, status

from clubhub.core.config import settings
from clubhub.core.errors import NotFoundError, UploadError
from clubhub.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
VIDEO_EXTENSIONS = frozenset({".mp4", ".mov", ".avi", ".wmv", ".flv", ".webm"})
DOCUMENT_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt"})

DOCUMENT_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
    }
)


@dataclass(frozen=True)
class UploadPolicy:
    """
    What one upload route accepts.

    Empty ``extensions`` / ``mime_prefixes`` / ``mime_types`` mean "any".
    A file passes the type filter when its extension is allowed and its mime
    type matches one of the prefixes or exact types.
    """

    field: str
    subdir: str
    prefix: str
    max_bytes: int
    extensions: FrozenSet[str] = frozenset()
    mime_prefixes: FrozenSet[str] = frozenset()
    mime_types: FrozenSet[str] = frozenset()
    description: str = "file"

    def accepts(self, filename: str, content_type: Optional[str]) -> bool:
        ext = Path(filename).suffix.lower()
        if self.extensions and ext not in self.extensions:
            return False
        if not (self.mime_prefixes or self.mime_types):
            return True
        mime = (content_type or "").lower()
        return mime in self.mime_types or any(mime.startswith(p) for p in self.mime_prefixes)


GALLERY_MEDIA = UploadPolicy(
    field="media",
    subdir="gallery",
    prefix="media",
    max_bytes=settings.MAX_MEDIA_UPLOAD_BYTES,
    extensions=IMAGE_EXTENSIONS | VIDEO_EXTENSIONS,
    mime_prefixes=frozenset({"image/", "video/"}),
    description="image and video files",
)

LEADERSHIP_PHOTO = UploadPolicy(
    field="photo",
    subdir="leadership",
    prefix="leader",
    max_bytes=settings.MAX_IMAGE_UPLOAD_BYTES,
    extensions=IMAGE_EXTENSIONS,
    mime_prefixes=frozenset({"image/"}),
    description="image files",
)

SITE_LOGO = UploadPolicy(
    field="logo",
    subdir="logos",
    prefix="logo",
    max_bytes=settings.MAX_IMAGE_UPLOAD_BYTES,
    extensions=IMAGE_EXTENSIONS | {".svg"},
    mime_prefixes=frozenset({"image/"}),
    description="image files",
)

REPORT_DOCUMENT = UploadPolicy(
    field="report",
    subdir="reports",
    prefix="report",
    max_bytes=settings.MAX_MEDIA_UPLOAD_BYTES,
    extensions=DOCUMENT_EXTENSIONS,
    mime_types=DOCUMENT_MIME_TYPES,
    description="PDF, Word, Excel, PowerPoint and text documents",
)

RESOURCE_FILE = UploadPolicy(
    field="file",
    subdir="resources",
    prefix="resource",
    max_bytes=settings.MAX_MEDIA_UPLOAD_BYTES,
)


@dataclass(frozen=True)
class StoredFile:
    """Metadata persisted alongside the owning document."""

    path: str  # relative to the upload root, e.g. "gallery/media-1700000000000-123456789.png"
    original_name: str
    size: int
    content_type: Optional[str]

    @property
    def url(self) -> str:
        return public_url(self.path)


def public_url(relative_path: Optional[str]) -> Optional[str]:
    """URL under the ``/uploads`` static mount, or None when there is no file."""
    if not relative_path:
        return None
    return f"/uploads/{relative_path}"


class FileStorageService:
    """Manages files under a single upload root."""

    def __init__(self, base_dir: str | Path):
        self.base_path = Path(base_dir)

    def _generate_name(self, policy: UploadPolicy, filename: str) -> str:
        ext = Path(filename).suffix.lower()
        stamp = int(time.time() * 1000)
        suffix = secrets.randbelow(10**9)
        return f"{policy.prefix}-{stamp}-{suffix:09d}{ext}"

    def save(self, file: UploadFile, policy: UploadPolicy) -> StoredFile:
        """
        Validate and write an uploaded file.

        Args:
            file: The uploaded file from FastAPI
            policy: Rules of the receiving route

        Returns:
            Stored file metadata

        Raises:
            UploadError: 400 for a rejected type or size, 500 for a write failure
        """
        filename = Path(file.filename or "").name
        if not filename:
            raise UploadError("No file uploaded")
        if not policy.accepts(filename, file.content_type):
            logger.warning(f"Rejected upload {filename!r} ({file.content_type}) for {policy.field}")
            raise UploadError(f"Only {policy.description} are allowed")

        target_dir = self.base_path / policy.subdir
        name = self._generate_name(policy, filename)
        target = target_dir / name
        written = 0
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as buffer:
                while True:
                    chunk = file.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > policy.max_bytes:
                        raise UploadError(
                            f"File too large. Maximum size is {policy.max_bytes // (1024 * 1024)}MB"
                        )
                    buffer.write(chunk)
        except UploadError:
            self._discard(target)
            logger.warning(f"Rejected upload {filename!r}: exceeds {policy.max_bytes} bytes")
            raise
        except OSError as e:
            self._discard(target)
            logger.error(f"Failed to save uploaded file {filename!r}: {e}")
            raise UploadError("Failed to save uploaded file", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Saved uploaded file: {target}")
        return StoredFile(
            path=f"{policy.subdir}/{name}",
            original_name=filename,
            size=written,
            content_type=file.content_type,
        )

    def resolve(self, relative_path: str) -> Path:
        return self.base_path / relative_path

    def existing_path(self, relative_path: Optional[str]) -> Path:
        """
        Absolute path of a stored file that is still on disk.

        Raises:
            NotFoundError: No path recorded, or the file is gone
        """
        if not relative_path:
            raise NotFoundError("File path not found")
        path = self.resolve(relative_path)
        if not path.is_file():
            logger.error(f"File not found on server: {path}")
            raise NotFoundError("File not found on server")
        return path

    def delete(self, relative_path: Optional[str]) -> bool:
        """
        Best-effort removal. Failures are logged, never raised.

        Returns:
            True if a file was removed
        """
        if not relative_path:
            return False
        path = self.resolve(relative_path)
        try:
            path.unlink()
            logger.info(f"Deleted file: {path}")
            return True
        except FileNotFoundError:
            logger.warning(f"File already missing: {path}")
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
        return False

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove partial upload {path}: {e}")


def get_file_storage() -> FileStorageService:
    """Dependency providing storage rooted at ``UPLOAD_DIR``. Tests override it."""
    return FileStorageService(settings.UPLOAD_DIR)
