"""
Place lifecycle workflows.

A place and its creator's `places` list reference each other and the database doesn't enforce it, so every
workflow that adds or removes a place changes both rows in one unit of work. Geocoding and image storage calls are
never part of the unit of work: they run before it on create (any failure aborts before anything is written) and
after it on delete (best-effort, never affects the result).
"""
from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError

from app.core.database.unit_of_work import UnitOfWork
from app.core.errors import CreatorNotFound, NoPlacesFound, PlaceNotFound, TransactionFailure
from app.core.types import PlaceId, UserId
from app.features.images.image_store import ImageStore
from app.features.places import place_utils
from app.features.places.entities import Place, PlaceDraft
from app.features.places.geocoding import GeocodingClient
from app.features.places.place_store import PlaceStore
from app.features.places.types import CreatePlaceRequest, PlaceWithCreator, UpdatePlaceRequest, UserWithPlaces
from app.features.users.user_store import UserStore
from app.utils import get_logger

log = get_logger(__name__)


async def create_place(
    caller_id: UserId,
    request: CreatePlaceRequest,
    image_data: bytes,
    image_content_type: str,
    place_store: PlaceStore,
    user_store: UserStore,
    uow: UnitOfWork,
    geocoder: GeocodingClient,
    image_store: ImageStore,
) -> Place:
    """Create a place owned by the caller and add it to the caller's places."""
    if await user_store.get_user(user_id=caller_id) is None:
        raise CreatorNotFound()
    await uow.release()

    # Step 1: Geocode; nothing has happened yet if this fails
    geocoded = await geocoder.resolve(request.address)
    # Step 2: Upload the image; still nothing written if this fails
    image = await image_store.upload(image_data, suggested_name=request.title.lower(), content_type=image_content_type)

    draft = PlaceDraft(
        title=request.title,
        description=request.description,
        address=geocoded.address,
        location=geocoded.location,
        image=image,
        creator_id=caller_id,
    )
    # Step 3: Insert the place and add it to the creator's places together
    try:
        async with uow:
            place = await place_store.insert_place(draft, uow)
            await user_store.append_place(caller_id, place.id, uow)
    except (SQLAlchemyError, ValueError) as e:
        log.exception("Failed to create place for user %s", caller_id)
        # TODO: delete orphaned uploads once there's a sweeper for them
        log.warning("Orphaned image upload %s", image.blob_name)
        raise TransactionFailure("Creating place failed, please try again.") from e
    return place.to_public()


async def update_place(
    place_id: PlaceId,
    caller_id: UserId,
    request: UpdatePlaceRequest,
    place_store: PlaceStore,
) -> Place:
    """Update the title and description of a place owned by the caller."""
    place = await place_utils.get_place_or_raise(place_store, place_id)
    place_utils.check_owner(place.creator_id, caller_id, action="edit")
    try:
        updated_place = await place_store.update_place(place.id, request.title, request.description)
    except (SQLAlchemyError, ValueError) as e:
        log.exception("Failed to update place %s", place_id)
        raise TransactionFailure("Something went wrong, could not update place.") from e
    return updated_place.to_public()


async def delete_place(
    place_id: PlaceId,
    caller_id: UserId,
    place_store: PlaceStore,
    user_store: UserStore,
    uow: UnitOfWork,
    image_store: ImageStore,
    background_tasks: BackgroundTasks,
) -> str:
    """
    Delete a place owned by the caller and remove it from the caller's places.

    The image is deleted by a background task after the unit of work commits. That deletion is best-effort: the
    place is gone whether or not it succeeds.
    """
    place_with_owner = await place_store.load_with_owner(place_id)
    if place_with_owner is None:
        raise PlaceNotFound()
    place, owner = place_with_owner
    place_utils.check_owner(owner.id, caller_id, action="delete")

    try:
        async with uow:
            await place_store.delete_place(place.id, uow)
            await user_store.remove_place(owner.id, place.id, uow)
    except (SQLAlchemyError, ValueError) as e:
        log.exception("Failed to delete place %s", place_id)
        raise TransactionFailure("Deleting place failed, please try again.") from e

    background_tasks.add_task(image_store.delete_by_handle, place.image_blob_name)
    return "Deleted place."


# Queries


async def get_all_places(place_store: PlaceStore, user_store: UserStore) -> list[PlaceWithCreator]:
    places = await place_store.get_all_places()
    if len(places) == 0:
        raise NoPlacesFound()
    creators = await user_store.get_users(list({place.creator_id for place in places}))
    result = []
    for place in places:
        creator = creators.get(place.creator_id)
        if creator is None:
            log.error("Expected creator %s of place %s to exist, found None", place.creator_id, place.id)
        public_creator = creator.to_public() if creator else None
        result.append(PlaceWithCreator(**place.to_public().model_dump(), creator=public_creator))
    return result


async def get_place_by_id(place_id: PlaceId, place_store: PlaceStore) -> Place:
    place = await place_utils.get_place_or_raise(place_store, place_id)
    return place.to_public()


async def get_places_by_owner(username: str, place_store: PlaceStore, user_store: UserStore) -> UserWithPlaces:
    """Return the user with their places resolved. A missing user and a user without places are both not found."""
    user = await user_store.get_user(name=username)
    if user is None or len(user.places) == 0:
        raise NoPlacesFound("Could not find a place with that user id.")
    places = await place_store.get_places(user.places)
    public_user = user.to_public()
    return UserWithPlaces(
        id=public_user.id,
        name=public_user.name,
        email=public_user.email,
        image=public_user.image,
        places=[place.to_public() for place in places],
    )
