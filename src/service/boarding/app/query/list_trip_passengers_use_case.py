from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.boarding.app.dto.passenger_view import PassengerView
from src.service.shared_kernel.domain.boarding_errors import TripNotFoundError
from src.service.shared_kernel.domain.value_object.seat_id import seat_sort_key


class ListTripPassengersUseCase:
    """
    Passenger list for the driver, in seat order

    Non-cancelled bookings only, ordered by each booking's first seat in grid
    order (1A, 1B, ..., 2A), then by booking time.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io(truncate_content=True)
    async def execute(self, *, trip_id: int) -> List[PassengerView]:
        async with self.uow_factory() as uow:
            if await uow.trip_repo.get_by_id(trip_id=trip_id) is None:
                raise TripNotFoundError(trip_id)
            bookings = await uow.booking_query_repo.list_by_trip(trip_id=trip_id)
            records = {
                str(record.booking_id): record
                for record in await uow.check_in_repo.list_by_trip(trip_id=trip_id)
            }

        # list_by_trip returns creation order; the stable sort keeps it for ties
        ordered = sorted(
            bookings,
            key=lambda b: min((seat_sort_key(s) for s in b.seat_ids), default=(2, 0, '')),
        )

        passengers = []
        for booking in ordered:
            record = records.get(str(booking.id))
            passengers.append(
                PassengerView(
                    booking_id=str(booking.id),
                    booking_reference=booking.booking_reference,
                    passenger_id=booking.passenger_id,
                    passenger_name=booking.passenger_name,
                    seat_ids=list(booking.seat_ids),
                    booking_status=booking.status,
                    check_in_status=record.status if record else booking.check_in_status,
                    check_in_time=record.check_in_time if record else None,
                    notes=record.notes if record else None,
                )
            )
        return passengers
