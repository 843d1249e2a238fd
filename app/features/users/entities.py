from datetime import datetime
from typing import Optional

from pydantic import Field

from app.core.types import Base, InternalBase, PlaceId, UserId
from app.features.images.entities import PublicImage


class PublicUser(Base):
    id: UserId
    name: str
    email: str
    image: Optional[PublicImage] = None
    places: list[PlaceId] = Field(default_factory=list)


class InternalUser(InternalBase):
    """A user as stored, minus the password hash which is never loaded."""

    id: UserId
    uid: str
    name: str
    email: str
    image_url: Optional[str]
    image_blob_name: Optional[str]
    places: list[PlaceId]
    created_at: datetime
    updated_at: datetime

    def to_public(self) -> PublicUser:
        image = PublicImage(url=self.image_url) if self.image_url else None
        return PublicUser(id=self.id, name=self.name, email=self.email, image=image, places=self.places)
