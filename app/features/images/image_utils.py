from fastapi import UploadFile

from app.core import config
from app.core.errors import InvalidImage

ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/jpg"}

# Magic numbers for the allowed types
_SIGNATURES = (b"\x89PNG\r\n\x1a\n", b"\xff\xd8\xff")


async def read_valid_image(file: UploadFile) -> bytes:
    """Read the uploaded image, raising InvalidImage unless it's a png or jpeg within the size limit."""
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidImage("Image must be a png or jpeg")
    data = await file.read(config.MAX_IMAGE_SIZE + 1)
    if len(data) > config.MAX_IMAGE_SIZE:
        raise InvalidImage(f"Max image size is {config.MAX_IMAGE_SIZE // (1024 * 1024)}MB")
    if not data.startswith(_SIGNATURES):
        raise InvalidImage("Image must be a png or jpeg")
    return data
