import re
import uuid

from google.auth.exceptions import GoogleAuthError  # type: ignore
from google.cloud.exceptions import GoogleCloudError  # type: ignore

from app.core.errors import UploadFailed
from app.core.firebase import FirebaseAdminProtocol
from app.features.images.entities import StoredImage
from app.utils import get_logger

log = get_logger(__name__)


def blob_name_for(suggested_name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", suggested_name.lower()).strip("-")
    return f"images/{uuid.uuid4()}-{slug or 'image'}"


class ImageStore:
    def __init__(self, firebase: FirebaseAdminProtocol):
        self.firebase = firebase

    async def upload(self, data: bytes, suggested_name: str, content_type: str = "image/jpeg") -> StoredImage:
        """Upload the given image, returning its public URL and storage handle. Raises UploadFailed."""
        blob_name = blob_name_for(suggested_name)
        try:
            url = await self.firebase.upload_image(blob_name, data, content_type)
        except (GoogleCloudError, GoogleAuthError, ValueError) as e:
            log.info("Failed to upload image %s: %s", blob_name, e)
            raise UploadFailed(str(e)) from e
        return StoredImage(url=url, blob_name=blob_name)

    async def delete_by_handle(self, blob_name: str) -> None:
        """
        Best-effort delete of the image stored under the given handle.

        Failures are logged and never raised or retried; callers must not depend on the image being gone.
        """
        try:
            await self.firebase.delete_image(blob_name)
        except Exception:  # noqa
            log.exception("Failed to delete image %s", blob_name)
