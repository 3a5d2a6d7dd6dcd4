"""
Unit of Work Pattern - one database session and its repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories share the UoW session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.shared_kernel.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.shared_kernel.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.shared_kernel.app.interface.i_check_in_repo import ICheckInRepo
    from src.service.shared_kernel.app.interface.i_trip_repo import ITripRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow_factory() as uow:
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    trip_repo: ITripRepo
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo
    check_in_repo: ICheckInRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, *, session_factory: Callable[[], AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory
        self._session_cm: AsyncContextManager[AsyncSession] | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.shared_kernel.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.shared_kernel.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.shared_kernel.driven_adapter.repo.check_in_repo_impl import (
            CheckInRepoImpl,
        )
        from src.service.shared_kernel.driven_adapter.repo.trip_repo_impl import TripRepoImpl

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share one session
        self.trip_repo = TripRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)
        self.check_in_repo = CheckInRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() outside of `async with`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
