from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.requests import Request

from app.core.database.unit_of_work import UnitOfWork
from app.core.types import MessageResponse, PlaceId
from app.features.images import image_utils
from app.features.images.image_store import ImageStore
from app.features.places import place_lifecycle
from app.features.places.geocoding import GeocodingClient
from app.features.places.place_store import PlaceStore
from app.features.places.types import (
    AllPlacesResponse,
    CreatePlaceRequest,
    PlaceResponse,
    UpdatePlaceRequest,
    UserPlacesResponse,
)
from app.features.stores import (
    get_geocoding_client,
    get_image_store,
    get_place_store,
    get_unit_of_work,
    get_user_store,
)
from app.features.users.dependencies import get_caller_user
from app.features.users.entities import InternalUser
from app.features.users.user_store import UserStore
from app.limiter import limiter

router = APIRouter()


# NOTE: the read routes are not authenticated
@router.get("", response_model=AllPlacesResponse)
async def get_all_places(
    place_store: PlaceStore = Depends(get_place_store),
    user_store: UserStore = Depends(get_user_store),
):
    """Get every place along with its creator."""
    places = await place_lifecycle.get_all_places(place_store, user_store)
    return AllPlacesResponse(places=places)


@router.get("/user/{username}", response_model=UserPlacesResponse)
async def get_places_by_owner(
    username: str,
    place_store: PlaceStore = Depends(get_place_store),
    user_store: UserStore = Depends(get_user_store),
):
    """Get the given user with their places."""
    user_with_places = await place_lifecycle.get_places_by_owner(username, place_store, user_store)
    return UserPlacesResponse(data=user_with_places)


@router.get("/{place_id}", response_model=PlaceResponse)
async def get_place(place_id: PlaceId, place_store: PlaceStore = Depends(get_place_store)):
    place = await place_lifecycle.get_place_by_id(place_id, place_store)
    return PlaceResponse(place=place)


@router.post("", response_model=PlaceResponse, status_code=201)
@limiter.limit("10/minute")
async def create_place(
    request: Request,  # This needs to be here for limiter
    title: str = Form(...),
    description: str = Form(...),
    address: str = Form(...),
    image: UploadFile = File(...),
    place_store: PlaceStore = Depends(get_place_store),
    user_store: UserStore = Depends(get_user_store),
    uow: UnitOfWork = Depends(get_unit_of_work),
    geocoder: GeocodingClient = Depends(get_geocoding_client),
    image_store: ImageStore = Depends(get_image_store),
    user: InternalUser = Depends(get_caller_user),
):
    """Create a new place owned by the caller."""
    try:
        req = CreatePlaceRequest(title=title, description=description, address=address)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    image_data = await image_utils.read_valid_image(image)
    place = await place_lifecycle.create_place(
        user.id,
        req,
        image_data,
        image.content_type or "image/jpeg",
        place_store=place_store,
        user_store=user_store,
        uow=uow,
        geocoder=geocoder,
        image_store=image_store,
    )
    return PlaceResponse(place=place)


@router.patch("/{place_id}", response_model=PlaceResponse)
async def update_place(
    place_id: PlaceId,
    req: UpdatePlaceRequest,
    place_store: PlaceStore = Depends(get_place_store),
    user: InternalUser = Depends(get_caller_user),
):
    """Update the title and description of the given place."""
    place = await place_lifecycle.update_place(place_id, user.id, req, place_store)
    return PlaceResponse(place=place)


@router.delete("/{place_id}", response_model=MessageResponse)
async def delete_place(
    place_id: PlaceId,
    background_tasks: BackgroundTasks,
    place_store: PlaceStore = Depends(get_place_store),
    user_store: UserStore = Depends(get_user_store),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: ImageStore = Depends(get_image_store),
    user: InternalUser = Depends(get_caller_user),
):
    """Delete the given place. The image is deleted in the background."""
    message = await place_lifecycle.delete_place(
        place_id,
        user.id,
        place_store=place_store,
        user_store=user_store,
        uow=uow,
        image_store=image_store,
        background_tasks=background_tasks,
    )
    return MessageResponse(message=message)
