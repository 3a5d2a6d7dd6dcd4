from typing import List, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.driven_adapter.model.booking_model import BookingModel
from src.service.shared_kernel.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.shared_kernel.driven_adapter.repo.booking_mapper import booking_model_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        model = await self.session.get(BookingModel, str(booking_id))
        return booking_model_to_entity(model) if model else None

    @Logger.io
    async def get_by_reference(self, *, booking_reference: str) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(
                BookingModel.booking_reference == booking_reference.strip().upper()
            )
        )
        model = result.scalar_one_or_none()
        return booking_model_to_entity(model) if model else None

    @Logger.io
    async def get_by_claim_token(self, *, claim_token: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.claim_token == str(claim_token))
        )
        model = result.scalar_one_or_none()
        return booking_model_to_entity(model) if model else None

    @Logger.io
    async def list_by_trip(self, *, trip_id: int, include_cancelled: bool = False) -> List[Booking]:
        stmt = select(BookingModel).where(BookingModel.trip_id == trip_id)
        if not include_cancelled:
            stmt = stmt.where(BookingModel.status != BookingStatus.CANCELLED.value)
        stmt = stmt.order_by(BookingModel.created_at, BookingModel.id)

        result = await self.session.execute(stmt)
        return [booking_model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def get_booked_seat_ids(self, *, trip_id: int) -> Set[str]:
        result = await self.session.execute(
            select(BookingSeatModel.seat_id).where(
                BookingSeatModel.trip_id == trip_id,
                BookingSeatModel.is_active.is_(True),
            )
        )
        return set(result.scalars().all())
