from datetime import datetime

from app.core.types import Base, InternalBase, PlaceId, UserId
from app.features.images.entities import PublicImage, StoredImage


class Location(Base):
    # Coordinates are kept as text, exactly as reported by the geocoder
    lat: str
    lng: str


class GeocodedAddress(Base):
    address: str
    lat: str
    lng: str

    @property
    def location(self) -> Location:
        return Location(lat=self.lat, lng=self.lng)


class Place(Base):
    """The public representation of a place."""

    id: PlaceId
    title: str
    description: str
    address: str
    location: Location
    image: PublicImage
    creator_id: UserId


class PlaceDraft(InternalBase):
    """A place that hasn't been inserted yet."""

    title: str
    description: str
    address: str
    location: Location
    image: StoredImage
    creator_id: UserId


class InternalPlace(InternalBase):
    id: PlaceId
    title: str
    description: str
    address: str
    latitude: str
    longitude: str
    image_url: str
    image_blob_name: str
    creator_id: UserId
    created_at: datetime
    updated_at: datetime

    @property
    def image(self) -> StoredImage:
        return StoredImage(url=self.image_url, blob_name=self.image_blob_name)

    def to_public(self) -> Place:
        return Place(
            id=self.id,
            title=self.title,
            description=self.description,
            address=self.address,
            location=Location(lat=self.latitude, lng=self.longitude),
            image=self.image.to_public(),
            creator_id=self.creator_id,
        )
