"""Image store port (abstract interface).

Product images are handed to a store that returns the public URL the
catalog records. Local disk serves development; tests use the in-memory
fake.
"""

from abc import ABC, abstractmethod


class ImageUploadError(Exception):
    """The store could not accept the image."""


class ImageStore(ABC):
    """Abstract image store interface."""

    @abstractmethod
    def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """Store the image and return the URL it is served from."""
        ...
