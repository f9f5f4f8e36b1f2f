"""Image store that writes uploads to a local directory."""

from pathlib import Path
from uuid import uuid4

from bakery.catalogue.images.port import ImageStore, ImageUploadError

_ALLOWED_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".avif"}


class LocalImageStore(ImageStore):
    """Saves images under ``media_dir`` and serves them from ``base_url``."""

    def __init__(self, media_dir: str, base_url: str = "/media") -> None:
        self.media_dir = Path(media_dir)
        self.base_url = base_url.rstrip("/")

    def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        if content_type and not content_type.startswith("image/"):
            raise ImageUploadError(f"Unsupported content type: {content_type}")
        if not content:
            raise ImageUploadError("Empty image upload")

        suffix = Path(filename or "").suffix.lower()
        if suffix not in _ALLOWED_SUFFIXES:
            suffix = ".jpg"

        stored_name = f"{uuid4().hex}{suffix}"
        try:
            self.media_dir.mkdir(parents=True, exist_ok=True)
            (self.media_dir / stored_name).write_bytes(content)
        except OSError as exc:
            raise ImageUploadError(str(exc)) from exc

        return f"{self.base_url}/{stored_name}"
