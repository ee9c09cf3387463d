"""Item image validation."""

from canteen.errors import InvalidRequest

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
ALLOWED_EXTENSIONS = {"jpeg", "jpg", "png", "webp"}


def validate_image(blob: bytes, content_type: str | None, filename: str | None = None) -> None:
    if not blob:
        raise InvalidRequest({"image": ["Image is empty"]})
    if len(blob) > MAX_IMAGE_BYTES:
        raise InvalidRequest({"image": ["Image must be at most 5 MB"]})
    if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise InvalidRequest({"image": ["Only jpeg, jpg, png and webp images are allowed"]})
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise InvalidRequest({"image": ["Only jpeg, jpg, png and webp images are allowed"]})
