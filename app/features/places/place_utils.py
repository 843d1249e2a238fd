from app.core.errors import NotAuthorized, PlaceNotFound
from app.core.types import PlaceId, UserId
from app.features.places.entities import InternalPlace
from app.features.places.place_store import PlaceStore


def check_owner(creator_id: UserId, caller_id: UserId, action: str) -> None:
    """Raise NotAuthorized unless the caller created the place. Must run before anything is written."""
    if creator_id != caller_id:
        raise NotAuthorized(f"You are not allowed to {action} this place.")


async def get_place_or_raise(place_store: PlaceStore, place_id: PlaceId) -> InternalPlace:
    place = await place_store.get_place(place_id)
    if place is None:
        raise PlaceNotFound()
    return place
