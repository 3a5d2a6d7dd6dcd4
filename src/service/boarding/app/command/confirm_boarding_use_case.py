from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.boarding.app.command.set_check_in_status_use_case import (
    SetCheckInStatusUseCase,
)
from src.service.boarding.app.dto.boarding_result import BoardingResult
from src.service.shared_kernel.domain.boarding_errors import (
    BookingNotFoundError,
    TripMismatchError,
)
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


class ConfirmBoardingUseCase:
    """
    Ticket scan at the bus door

    The scanned code is a booking reference (any case) or a booking id.
    A ticket for another trip is rejected; otherwise the passenger is
    checked in.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        set_check_in_status_use_case: SetCheckInStatusUseCase,
    ) -> None:
        self.uow_factory = uow_factory
        self.set_check_in_status_use_case = set_check_in_status_use_case

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        set_check_in_status_use_case: SetCheckInStatusUseCase = Depends(
            SetCheckInStatusUseCase.depends
        ),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            set_check_in_status_use_case=set_check_in_status_use_case,
        )

    async def _resolve(self, *, ticket_id: str) -> Booking:
        code = ticket_id.strip()
        async with self.uow_factory() as uow:
            booking = await uow.booking_query_repo.get_by_reference(booking_reference=code)
            if booking is None:
                try:
                    booking_id = UUID(code)
                except (TypeError, ValueError):
                    booking_id = None
                if booking_id is not None:
                    booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)

        if booking is None or not booking.matches_ticket(code):
            raise BookingNotFoundError(code)
        return booking

    @Logger.io
    async def execute(self, *, trip_id: int, ticket_id: str) -> BoardingResult:
        booking = await self._resolve(ticket_id=ticket_id)
        if booking.trip_id != trip_id:
            Logger.base.warning(
                f'🚫 [BOARDING] Ticket {booking.booking_reference} is for trip {booking.trip_id}, '
                f'scanned on trip {trip_id}'
            )
            raise TripMismatchError(booking_id=booking.booking_reference, trip_id=trip_id)

        record = await self.set_check_in_status_use_case.execute(
            trip_id=trip_id, booking_id=booking.id, status=CheckInStatus.CHECKED_IN
        )
        booking = booking.mirror_check_in(check_in_status=record.status, now=record.updated_at)
        return BoardingResult(booking=booking, check_in=record)
