import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.unit_of_work import UnitOfWork
from app.features.users.user_store import UserStore
from tests.utils import get_user_place_ids, make_user

pytestmark = pytest.mark.asyncio
USER_A_ID = uuid.uuid4()
USER_B_ID = uuid.uuid4()
PLACE_ID = uuid.uuid4()
PLACE_2_ID = uuid.uuid4()


@pytest_asyncio.fixture(autouse=True, scope="function")
async def setup_fixture(session):
    session.add(make_user(USER_A_ID, "a", places=[PLACE_ID]))
    session.add(make_user(USER_B_ID, "b"))
    await session.commit()


@pytest.fixture(scope="function")
def user_store(session: AsyncSession) -> UserStore:
    return UserStore(db=session)


async def test_get_user(user_store: UserStore):
    user = await user_store.get_user(user_id=USER_A_ID)
    assert user is not None
    assert user.name == "a"
    assert user.places == [PLACE_ID]
    assert not hasattr(user, "password_hash")
    assert (await user_store.get_user(uid="b")).id == USER_B_ID  # type: ignore
    assert (await user_store.get_user(name="b")).id == USER_B_ID  # type: ignore
    assert await user_store.get_user(name="c") is None


async def test_get_users(user_store: UserStore):
    users = await user_store.get_users([USER_A_ID, USER_B_ID, uuid.uuid4()])
    assert set(users.keys()) == {USER_A_ID, USER_B_ID}
    assert await user_store.get_users([]) == {}


async def test_public_user_hides_password(user_store: UserStore):
    user = await user_store.get_user(user_id=USER_A_ID)
    public_user = user.to_public()  # type: ignore
    assert "password" not in str(public_user.model_dump(by_alias=True)).lower()


async def test_append_and_remove_place(session: AsyncSession, user_store: UserStore):
    uow = UnitOfWork(session)
    async with uow:
        user = await user_store.append_place(USER_A_ID, PLACE_2_ID, uow)
    assert user.places == [PLACE_ID, PLACE_2_ID]
    assert await get_user_place_ids(session, USER_A_ID) == [str(PLACE_ID), str(PLACE_2_ID)]

    async with uow:
        user = await user_store.remove_place(USER_A_ID, PLACE_ID, uow)
    assert user.places == [PLACE_2_ID]
    assert await get_user_place_ids(session, USER_A_ID) == [str(PLACE_2_ID)]


async def test_append_place_aborted(session: AsyncSession, user_store: UserStore):
    uow = UnitOfWork(session)
    await uow.begin()
    await user_store.append_place(USER_B_ID, PLACE_2_ID, uow)
    await uow.abort()
    assert await get_user_place_ids(session, USER_B_ID) == []


async def test_append_place_missing_user(session: AsyncSession, user_store: UserStore):
    uow = UnitOfWork(session)
    with pytest.raises(ValueError):
        async with uow:
            await user_store.append_place(uuid.uuid4(), PLACE_2_ID, uow)
    assert not uow.active
