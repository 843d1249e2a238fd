from sqlalchemy.ext.asyncio import AsyncSession


class UnitOfWork:
    """
    A transactional scope over a database session.

    Pass the same unit of work to every store call that has to become visible together; the writes are flushed into
    the session's transaction and only published by commit(). Use it as an async context manager to commit on success
    and abort on any exception:

        async with uow:
            await place_store.insert_place(draft, uow)
            await user_store.append_place(user_id, place_id, uow)

    External calls (geocoding, image uploads) must not run inside the scope since they can't be rolled back. Call
    release() before them so that earlier reads don't keep a transaction open while they run. Reads made before
    begin() are not part of the unit.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    async def begin(self) -> None:
        if self._active:
            raise RuntimeError("Unit of work already started")
        await self.release()
        await self.db.begin()
        self._active = True

    async def release(self) -> None:
        """End the read transaction the session started on its own, returning its connection to the pool."""
        if self._active:
            raise RuntimeError("Unit of work already started")
        if self.db.in_transaction():
            await self.db.commit()

    async def commit(self) -> None:
        self._check_active()
        try:
            await self.db.commit()
        finally:
            self._active = False

    async def abort(self) -> None:
        self._check_active()
        try:
            await self.db.rollback()
        finally:
            self._active = False

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self._active:
            return
        if exc_type is not None:
            await self.abort()
        else:
            await self.commit()

    def _check_active(self) -> None:
        if not self._active:
            raise RuntimeError("Unit of work is not active")
