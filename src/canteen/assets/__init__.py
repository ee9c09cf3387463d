"""Asset storage factory.

``ASSET_STORAGE`` picks the adapter: ``memory`` (default) or ``s3``, which
reads its bucket from ``ASSET_S3_BUCKET``.
"""

import os

from canteen.assets.port import AssetStorage

_current_storage: AssetStorage | None = None


def get_storage() -> AssetStorage:
    global _current_storage
    if _current_storage is None:
        adapter = os.environ.get("ASSET_STORAGE", "memory")
        if adapter == "memory":
            from canteen.assets.memory_adapter import InMemoryAssetStorage

            _current_storage = InMemoryAssetStorage()
        elif adapter == "s3":
            from canteen.assets.s3_adapter import S3AssetStorage

            _current_storage = S3AssetStorage(
                bucket=os.environ["ASSET_S3_BUCKET"],
                base_url=os.environ.get("ASSET_BASE_URL"),
            )
        else:
            raise ValueError(f"Unknown asset storage: {adapter}")
    return _current_storage


def set_storage(storage: AssetStorage) -> None:
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    global _current_storage
    _current_storage = None
