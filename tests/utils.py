import uuid
from contextlib import contextmanager
from typing import Optional
from unittest.mock import AsyncMock

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.models import PlaceRow, UserRow
from app.core.firebase import FirebaseUser, get_firebase_user
from app.features.images.entities import StoredImage
from app.features.places.entities import GeocodedAddress
from app.main import app as main_app
from tests.mock_firebase import MockFirebaseAdmin

# Smallest valid-looking jpeg header plus padding
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64

OFFICE = GeocodedAddress(address="1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA", lat="37.422", lng="-122.084")


def make_user(user_id: uuid.UUID, name: str, places: Optional[list[uuid.UUID]] = None) -> UserRow:
    return UserRow(
        id=user_id,
        uid=name,
        name=name,
        email=f"{name}@example.com",
        password_hash="not-a-real-hash",
        places=[str(place_id) for place_id in places or []],
    )


def make_place(place_id: uuid.UUID, creator_id: uuid.UUID, title: str = "place") -> PlaceRow:
    return PlaceRow(
        id=place_id,
        title=title,
        description="A nice place",
        address="1 Main St",
        latitude="1.0",
        longitude="2.0",
        image_url=f"https://storage.googleapis.com/test-bucket/images/{place_id}",
        image_blob_name=f"images/{place_id}",
        creator_id=creator_id,
    )


def mock_geocoder(result: GeocodedAddress = OFFICE) -> AsyncMock:
    geocoder = AsyncMock()
    geocoder.resolve.return_value = result
    return geocoder


def mock_image_store() -> AsyncMock:
    image_store = AsyncMock()
    image_store.upload.return_value = StoredImage(url="https://storage.googleapis.com/test-bucket/office", blob_name="images/office")
    return image_store


async def get_user_place_ids(session: AsyncSession, user_id: uuid.UUID) -> list[str]:
    """Read the user's places and end the read transaction so the app can write."""
    result = await session.execute(sa.select(UserRow.places).where(UserRow.id == user_id))
    places = result.scalar_one()
    await session.rollback()
    return places


async def get_place_snapshot(session: AsyncSession, place_id: uuid.UUID) -> Optional[tuple]:
    """Read the place's columns (None if it doesn't exist) and end the read transaction."""
    result = await session.execute(
        sa.select(PlaceRow.title, PlaceRow.description, PlaceRow.creator_id).where(PlaceRow.id == place_id)
    )
    row = result.first()
    await session.rollback()
    return tuple(row) if row else None


async def count_places(session: AsyncSession) -> int:
    result = await session.execute(sa.select(sa.func.count()).select_from(PlaceRow))
    count = result.scalar_one()
    await session.rollback()
    return count


@contextmanager
def request_as(uid: str, firebase: Optional[MockFirebaseAdmin] = None):
    firebase_user = FirebaseUser(firebase or MockFirebaseAdmin(), uid=uid)
    main_app.dependency_overrides[get_firebase_user] = lambda: firebase_user
    yield firebase_user
    main_app.dependency_overrides.pop(get_firebase_user, None)
