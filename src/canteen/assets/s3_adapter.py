"""S3 asset storage adapter (production stub).

Placeholder for the boto3 integration that uploads item images to a public
bucket under ``items/``.
"""

from canteen.assets.port import AssetStorage


class S3AssetStorage(AssetStorage):
    """Production S3 adapter. Not yet implemented."""

    def __init__(self, bucket: str, base_url: str | None = None) -> None:
        self.bucket = bucket
        self.base_url = base_url

    def store(self, blob: bytes, content_type: str, filename: str | None = None) -> str:
        raise NotImplementedError("S3AssetStorage.store() is not yet implemented. Integrate boto3 here.")
