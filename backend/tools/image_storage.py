"""
Profile image storage.

Files live under <media_dir>/profile-images and are served as static
files under <media_url>/profile-images.
"""

import logging
import re
import time
from pathlib import Path

from backend.config import settings

logger = logging.getLogger(__name__)

BUCKET = "profile-images"
ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}

_SAFE_NAME = re.compile(r"[A-Za-z0-9._-]+")


class StorageError(ValueError):
    """Raised when an upload is rejected."""


class ImageStorage:
    """Local bucket for profile photos."""

    def __init__(self, root: str | Path, base_url: str, max_size: int):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.max_size = max_size

    @property
    def bucket_dir(self) -> Path:
        return self.root / BUCKET

    def upload(self, content: bytes, filename: str, profile_id: str) -> str:
        """Store an image and return its public URL."""
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if ext not in ALLOWED_EXTENSIONS:
            raise StorageError(f"Unsupported image type: {filename or '<unnamed>'}")
        if not content:
            raise StorageError("Image file is empty")
        if len(content) > self.max_size:
            raise StorageError(f"Image exceeds {self.max_size // (1024 * 1024)} MB limit")
        if not _SAFE_NAME.fullmatch(profile_id):
            raise StorageError("Invalid profile id")

        name = f"{profile_id}-{int(time.time() * 1000)}.{ext}"
        self.bucket_dir.mkdir(parents=True, exist_ok=True)
        (self.bucket_dir / name).write_bytes(content)

        logger.info(f"Stored profile image {name} ({len(content)} bytes)")
        return f"{self.base_url}/{BUCKET}/{name}"

    def delete(self, url: str) -> bool:
        """Remove a stored image by URL. Returns False when nothing was removed."""
        prefix = f"{self.base_url}/{BUCKET}/"
        if not (url or "").startswith(prefix):
            return False

        name = url[len(prefix):]
        if not _SAFE_NAME.fullmatch(name) or name in (".", ".."):
            return False

        path = self.bucket_dir / name
        if not path.is_file():
            return False

        path.unlink()
        logger.info(f"Deleted profile image {name}")
        return True


def get_image_storage() -> ImageStorage:
    """FastAPI dependency returning storage built from settings."""
    return ImageStorage(settings.media_dir, settings.media_url, settings.max_image_size)
