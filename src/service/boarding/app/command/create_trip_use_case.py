from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.boarding.domain.trip_entity import Trip


class CreateTripUseCase:
    """Called by the scheduler when a departure is published"""

    def __init__(self, *, uow_factory: UnitOfWorkFactory, clock: Clock) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow_factory=uow_factory, clock=clock)

    @Logger.io
    async def execute(
        self,
        *,
        route_ref: str,
        bus_plate: str,
        capacity: int,
        departure_at: datetime,
        arrival_at: Optional[datetime] = None,
        company_id: Optional[int] = None,
    ) -> Trip:
        trip = Trip.create(
            route_ref=route_ref,
            bus_plate=bus_plate,
            capacity=capacity,
            departure_at=departure_at,
            arrival_at=arrival_at,
            company_id=company_id,
            now=self.clock(),
        )
        async with self.uow_factory() as uow:
            trip = await uow.trip_repo.create(trip=trip)
            await uow.commit()

        Logger.base.info(
            f'🚌 [TRIP] Created trip {trip.id} ({trip.route_ref}, {trip.bus_plate}, '
            f'{trip.capacity} seats)'
        )
        return trip
