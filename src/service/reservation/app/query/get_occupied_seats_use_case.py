from typing import Self, Set

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.shared_kernel.domain.boarding_errors import TripNotFoundError


class GetOccupiedSeatsUseCase:
    """Seats a new claim cannot take right now: booked plus actively held"""

    def __init__(
        self, *, uow_factory: UnitOfWorkFactory, seat_hold_store: ISeatHoldStore, clock: Clock
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_hold_store = seat_hold_store
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        seat_hold_store: ISeatHoldStore = Depends(Provide[Container.seat_hold_store]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow_factory=uow_factory, seat_hold_store=seat_hold_store, clock=clock)

    @Logger.io
    async def execute(self, *, trip_id: int) -> Set[str]:
        async with self.uow_factory() as uow:
            if await uow.trip_repo.get_by_id(trip_id=trip_id) is None:
                raise TripNotFoundError(trip_id)
            booked = await uow.booking_query_repo.get_booked_seat_ids(trip_id=trip_id)

        held = await self.seat_hold_store.held_seat_ids(trip_id=trip_id, now=self.clock())
        return booked | held
