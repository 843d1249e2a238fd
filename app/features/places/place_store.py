from typing import Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.models import PlaceRow, UserRow
from app.core.database.unit_of_work import UnitOfWork
from app.core.types import PlaceId
from app.features.places.entities import InternalPlace, PlaceDraft
from app.features.places.place_query import PlaceQuery
from app.features.users.entities import InternalUser


class PlaceStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_place(self, place_id: PlaceId) -> Optional[InternalPlace]:
        place_row = await PlaceQuery().place_id(place_id).execute_one(self.db)
        return InternalPlace.model_validate(place_row) if place_row else None

    async def get_places(self, place_ids: list[PlaceId]) -> list[InternalPlace]:
        """Return the places with the given ids, in the given order, skipping ids that don't exist."""
        if len(place_ids) == 0:
            return []
        rows = await PlaceQuery().place_id_in(place_ids).execute_many(self.db)
        rows_by_id = {row.id: row for row in rows}
        return [InternalPlace.model_validate(rows_by_id[id]) for id in place_ids if id in rows_by_id]

    async def get_all_places(self) -> list[InternalPlace]:
        rows = await PlaceQuery().order_by_created().execute_many(self.db)
        return [InternalPlace.model_validate(row) for row in rows]

    async def load_with_owner(self, place_id: PlaceId) -> Optional[tuple[InternalPlace, InternalUser]]:
        """Load the place (including its storage handle) together with the user that created it."""
        query = (
            sa.select(PlaceRow, UserRow)
            .join(UserRow, UserRow.id == PlaceRow.creator_id)
            .where(PlaceRow.id == place_id)
        )
        result = await self.db.execute(query)
        row = result.first()
        if row is None:
            return None
        place_row, user_row = row
        return InternalPlace.model_validate(place_row), InternalUser.model_validate(user_row)

    # Operations
    async def insert_place(self, draft: PlaceDraft, uow: UnitOfWork) -> InternalPlace:
        """Insert the place as part of the given unit of work. Not visible to others until the unit is committed."""
        place = PlaceRow(
            title=draft.title,
            description=draft.description,
            address=draft.address,
            latitude=draft.location.lat,
            longitude=draft.location.lng,
            image_url=draft.image.url,
            image_blob_name=draft.image.blob_name,
            creator_id=draft.creator_id,
        )
        uow.db.add(place)
        await uow.db.flush()
        await uow.db.refresh(place)
        return InternalPlace.model_validate(place)

    async def update_place(self, place_id: PlaceId, title: str, description: str) -> InternalPlace:
        """Update the given place's title and description. Single row write, commits immediately."""
        place: Optional[PlaceRow] = await PlaceQuery().place_id(place_id).execute_one(self.db)
        if place is None:
            raise ValueError("Place does not exist.")
        place.title = title
        place.description = description
        await self.db.commit()
        await self.db.refresh(place)
        return InternalPlace.model_validate(place)

    async def delete_place(self, place_id: PlaceId, uow: UnitOfWork) -> None:
        """Delete the given place as part of the given unit of work, raising ValueError if it doesn't exist."""
        result = await uow.db.execute(sa.delete(PlaceRow).where(PlaceRow.id == place_id))
        if result.rowcount != 1:  # type: ignore
            raise ValueError("Place does not exist.")
