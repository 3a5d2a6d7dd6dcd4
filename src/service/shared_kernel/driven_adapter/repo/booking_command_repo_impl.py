"""
Booking Command Repository Implementation

Writes the booking row and its booking_seat rows in the caller's session.
"""

from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.shared_kernel.domain.boarding_errors import (
    BookingCancelledError,
    BookingNotFoundError,
    SeatsUnavailableError,
)
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.domain.value_object.seat_id import sort_seat_ids
from src.service.shared_kernel.driven_adapter.model.booking_model import BookingModel
from src.service.shared_kernel.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.shared_kernel.driven_adapter.repo.booking_mapper import booking_model_to_entity


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    async def _active_conflicts(self, *, trip_id: int, seat_ids: List[str]) -> List[str]:
        result = await self.session.execute(
            select(BookingSeatModel.seat_id).where(
                BookingSeatModel.trip_id == trip_id,
                BookingSeatModel.is_active.is_(True),
                BookingSeatModel.seat_id.in_(seat_ids),
            )
        )
        return sort_seat_ids(set(result.scalars().all()))

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        booking_id = str(booking.id)
        model = BookingModel(
            id=booking_id,
            trip_id=booking.trip_id,
            passenger_id=booking.passenger_id,
            passenger_name=booking.passenger_name,
            seat_ids=list(booking.seat_ids),
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            booking_reference=booking.booking_reference,
            claim_token=str(booking.claim_token) if booking.claim_token else None,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            cancelled_at=booking.cancelled_at,
        )
        self.session.add(model)
        self.session.add_all(
            BookingSeatModel(
                booking_id=booking_id,
                trip_id=booking.trip_id,
                seat_id=seat_id,
                is_active=booking.is_active,
            )
            for seat_id in booking.seat_ids
        )

        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            conflicts = await self._active_conflicts(
                trip_id=booking.trip_id, seat_ids=booking.seat_ids
            )
            if not conflicts:
                raise
            Logger.base.warning(
                f'🚫 [BOOKING-REPO] Unique seat index rejected booking {booking_id}: {conflicts}'
            )
            raise SeatsUnavailableError(conflicts)

        return booking_model_to_entity(model)

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        booking_id = str(booking.id)
        model = await self.session.get(BookingModel, booking_id, populate_existing=True)
        if model is None:
            raise BookingNotFoundError(booking.id)
        # A cancelled booking has already given its seats back
        if (
            model.status == BookingStatus.CANCELLED.value
            and booking.status != BookingStatus.CANCELLED
        ):
            raise BookingCancelledError(booking.id)

        model.status = booking.status.value
        model.payment_status = booking.payment_status.value
        model.updated_at = booking.updated_at  # type: ignore[assignment]
        model.cancelled_at = booking.cancelled_at

        if booking.status == BookingStatus.CANCELLED:
            await self.session.execute(
                update(BookingSeatModel)
                .where(BookingSeatModel.booking_id == booking_id)
                .values(is_active=False)
            )

        await self.session.flush()
        return booking_model_to_entity(model)
