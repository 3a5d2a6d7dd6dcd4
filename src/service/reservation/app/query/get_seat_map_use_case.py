from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.reservation.domain.seat_map_builder import SeatMap, build_seat_map
from src.service.shared_kernel.domain.boarding_errors import TripNotFoundError


class GetSeatMapUseCase:
    """Snapshot of the trip's seats for the driver screen and new live viewers"""

    def __init__(
        self, *, uow_factory: UnitOfWorkFactory, seat_hold_store: ISeatHoldStore, clock: Clock
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_hold_store = seat_hold_store
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        seat_hold_store: ISeatHoldStore = Depends(Provide[Container.seat_hold_store]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow_factory=uow_factory, seat_hold_store=seat_hold_store, clock=clock)

    @Logger.io(truncate_content=True)
    async def execute(self, *, trip_id: int) -> SeatMap:
        with self.tracer.start_as_current_span('use_case.get_seat_map', attributes={'trip.id': trip_id}):
            async with self.uow_factory() as uow:
                trip = await uow.trip_repo.get_by_id(trip_id=trip_id)
                if trip is None:
                    raise TripNotFoundError(trip_id)
                bookings = await uow.booking_query_repo.list_by_trip(trip_id=trip_id)
                check_ins = await uow.check_in_repo.list_by_trip(trip_id=trip_id)

            held = await self.seat_hold_store.held_seat_ids(trip_id=trip_id, now=self.clock())
            return build_seat_map(
                trip_id=trip_id,
                capacity=trip.capacity,
                bookings=bookings,
                check_ins=check_ins,
                held_seats=held,
            )
