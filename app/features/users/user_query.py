import typing

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.models import UserRow
from app.core.types import UserId, QueryEntity

UserQueryT = typing.TypeVar("UserQueryT", bound="UserQuery")


class UserQuery:
    def __init__(self: UserQueryT, query_entity: QueryEntity = UserRow):
        """You can set query_entity to UserRow.id if you only want to query user IDs."""
        self.query: sa.sql.Select = sa.select(query_entity)
        self.query_entity = query_entity

    # Simple fields
    def user_id(self: UserQueryT, user_id: UserId) -> UserQueryT:
        self.query = self.query.where(UserRow.id == user_id)
        return self

    def name(self: UserQueryT, name: str) -> UserQueryT:
        self.query = self.query.where(UserRow.name == name)
        return self

    def uid(self: UserQueryT, uid: str) -> UserQueryT:
        self.query = self.query.where(UserRow.uid == uid)
        return self

    # Collection query
    def user_id_in(self: UserQueryT, user_ids: typing.Collection[UserId]) -> UserQueryT:
        self.query = self.query.where(UserRow.id.in_(user_ids))
        return self

    async def execute_many(self: UserQueryT, session: AsyncSession) -> list[QueryEntity]:
        result = await session.execute(self.query)
        return result.scalars().all()  # type: ignore

    async def execute_one(self: UserQueryT, session: AsyncSession) -> typing.Optional[QueryEntity]:
        result = await session.execute(self.query)
        return result.scalars().first()
