"""Asset storage port: where item images end up."""

from abc import ABC, abstractmethod


class AssetStorage(ABC):
    @abstractmethod
    def store(self, blob: bytes, content_type: str, filename: str | None = None) -> str:
        """Persist ``blob`` and return a URL it can be fetched from."""
        ...
