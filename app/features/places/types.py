from typing import Annotated, Optional

from pydantic import AfterValidator

from app.core.types import Base, UserId
from app.features.images.entities import PublicImage
from app.features.places import validators
from app.features.places.entities import Place
from app.features.users.entities import PublicUser

ValidatedTitle = Annotated[str, AfterValidator(validators.validate_title)]
ValidatedDescription = Annotated[str, AfterValidator(validators.validate_description)]
ValidatedAddress = Annotated[str, AfterValidator(validators.validate_address)]


class CreatePlaceRequest(Base):
    """The text fields of the multipart create request; the image is sent as a file."""

    title: ValidatedTitle
    description: ValidatedDescription
    address: ValidatedAddress


class UpdatePlaceRequest(Base):
    title: ValidatedTitle
    description: ValidatedDescription


class PlaceWithCreator(Place):
    creator: Optional[PublicUser] = None


class UserWithPlaces(Base):
    id: UserId
    name: str
    email: str
    image: Optional[PublicImage] = None
    places: list[Place]


class PlaceResponse(Base):
    place: Place


class AllPlacesResponse(Base):
    places: list[PlaceWithCreator]


class UserPlacesResponse(Base):
    data: UserWithPlaces
