"""Recipe generator port (abstract interface)."""

from abc import ABC, abstractmethod

OVERLOADED_STATUS = 503


class GenerationError(Exception):
    """The text service refused or failed a request."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def retriable(self) -> bool:
        # Only an overloaded service is worth asking again
        return self.status == OVERLOADED_STATUS


class RecipeGenerator(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt`` or raise GenerationError."""
        ...
