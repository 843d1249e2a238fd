import typing

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.models import PlaceRow
from app.core.types import PlaceId, QueryEntity

PlaceQueryT = typing.TypeVar("PlaceQueryT", bound="PlaceQuery")


class PlaceQuery:
    def __init__(self, query_entity: QueryEntity = PlaceRow):
        self.query = sa.select(query_entity)

    def place_id(self: PlaceQueryT, place_id: PlaceId) -> PlaceQueryT:
        self.query = self.query.where(PlaceRow.id == place_id)
        return self

    def place_id_in(self: PlaceQueryT, place_ids: typing.Collection[PlaceId]) -> PlaceQueryT:
        self.query = self.query.where(PlaceRow.id.in_(place_ids))
        return self

    def order_by_created(self: PlaceQueryT) -> PlaceQueryT:
        self.query = self.query.order_by(PlaceRow.created_at, PlaceRow.id)
        return self

    async def execute_many(self: PlaceQueryT, session: AsyncSession) -> list[QueryEntity]:
        result = await session.execute(self.query)
        return result.scalars().all()  # type: ignore

    async def execute_one(self: PlaceQueryT, session: AsyncSession) -> typing.Optional[QueryEntity]:
        result = await session.execute(self.query)
        return result.scalars().first()
