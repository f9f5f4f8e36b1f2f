"""Configurable fake image store for development and testing."""

from uuid import uuid4

from bakery.catalogue.images.port import ImageStore, ImageUploadError


class FakeImageStore(ImageStore):
    """Keeps uploads in memory and hands back predictable URLs."""

    def __init__(self, base_url: str = "https://images.test") -> None:
        self.base_url = base_url
        self.should_succeed: bool = True
        self.failure_reason: str = "Upload rejected"
        self.uploads: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Upload rejected") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        if not self.should_succeed:
            raise ImageUploadError(self.failure_reason)

        url = f"{self.base_url}/{uuid4().hex[:12]}-{filename}"
        self.uploads.append({"filename": filename, "size": len(content), "content_type": content_type, "url": url})
        return url

    def reset(self) -> None:
        self.uploads.clear()
        self.should_succeed = True
        self.failure_reason = "Upload rejected"
