"""In-memory asset storage. Keeps uploads in a dict for dev and tests."""

import os
from uuid import uuid4

from canteen.assets.port import AssetStorage

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class InMemoryAssetStorage(AssetStorage):
    def __init__(self, base_url: str | None = None):
        self.base_url = (base_url or os.environ.get("ASSET_BASE_URL", "memory://assets")).rstrip("/")
        self.objects: dict[str, tuple[bytes, str]] = {}

    def store(self, blob: bytes, content_type: str, filename: str | None = None) -> str:
        key = f"items/{uuid4().hex}.{EXTENSIONS.get(content_type, 'bin')}"
        url = f"{self.base_url}/{key}"
        self.objects[url] = (blob, content_type)
        return url

    def reset(self):
        self.objects.clear()
