from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.models import UserRow
from app.core.database.unit_of_work import UnitOfWork
from app.core.types import PlaceId, UserId
from app.features.users.entities import InternalUser
from app.features.users.user_query import UserQuery


class UserStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(
        self,
        user_id: Optional[UserId] = None,
        uid: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Optional[InternalUser]:
        query = UserQuery()
        if user_id:
            query = query.user_id(user_id)
        if uid:
            query = query.uid(uid)
        if name:
            query = query.name(name)
        user: Optional[UserRow] = await query.execute_one(self.db)
        return InternalUser.model_validate(user) if user else None

    async def get_users(self, user_ids: list[UserId]) -> dict[UserId, InternalUser]:
        if len(user_ids) == 0:
            return {}
        users = await UserQuery().user_id_in(user_ids).execute_many(self.db)
        return {user.id: InternalUser.model_validate(user) for user in users}

    # Operations
    async def append_place(self, user_id: UserId, place_id: PlaceId, uow: UnitOfWork) -> InternalUser:
        """Add the place to the end of the user's places as part of the given unit of work."""
        user = await self._get_row_or_raise(user_id, uow)
        # Reassign instead of appending in place so the JSON column is marked as changed
        user.places = [*user.places, str(place_id)]
        return await self._flush(user, uow)

    async def remove_place(self, user_id: UserId, place_id: PlaceId, uow: UnitOfWork) -> InternalUser:
        """Remove every reference to the place from the user's places as part of the given unit of work."""
        user = await self._get_row_or_raise(user_id, uow)
        user.places = [id for id in user.places if id != str(place_id)]
        return await self._flush(user, uow)

    async def _get_row_or_raise(self, user_id: UserId, uow: UnitOfWork) -> UserRow:
        user: Optional[UserRow] = await UserQuery().user_id(user_id).execute_one(uow.db)
        if user is None:
            raise ValueError("User does not exist.")
        return user

    async def _flush(self, user: UserRow, uow: UnitOfWork) -> InternalUser:
        await uow.db.flush()
        await uow.db.refresh(user)
        return InternalUser.model_validate(user)
