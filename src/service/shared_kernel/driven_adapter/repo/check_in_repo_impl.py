from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.boarding.domain.check_in_entity import CheckInRecord
from src.service.shared_kernel.app.interface.i_check_in_repo import ICheckInRepo
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus
from src.service.shared_kernel.driven_adapter.model.check_in_model import CheckInModel


class CheckInRepoImpl(ICheckInRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(model: CheckInModel) -> CheckInRecord:
        return CheckInRecord(
            id=model.id,
            trip_id=model.trip_id,
            booking_id=UUID(model.booking_id),
            status=CheckInStatus(model.status),
            check_in_time=model.check_in_time,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _get_model(self, *, trip_id: int, booking_id: UUID) -> Optional[CheckInModel]:
        result = await self.session.execute(
            select(CheckInModel).where(
                CheckInModel.trip_id == trip_id,
                CheckInModel.booking_id == str(booking_id),
            )
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def get(self, *, trip_id: int, booking_id: UUID) -> Optional[CheckInRecord]:
        model = await self._get_model(trip_id=trip_id, booking_id=booking_id)
        return self._to_entity(model) if model else None

    @Logger.io
    async def upsert(self, *, record: CheckInRecord) -> CheckInRecord:
        model = await self._get_model(trip_id=record.trip_id, booking_id=record.booking_id)
        if model is None:
            model = CheckInModel(
                trip_id=record.trip_id,
                booking_id=str(record.booking_id),
                created_at=record.created_at,
            )
            self.session.add(model)

        model.status = record.status.value
        model.check_in_time = record.check_in_time
        model.notes = record.notes
        model.updated_at = record.updated_at  # type: ignore[assignment]

        await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def list_by_trip(self, *, trip_id: int) -> List[CheckInRecord]:
        result = await self.session.execute(
            select(CheckInModel)
            .where(CheckInModel.trip_id == trip_id)
            .order_by(CheckInModel.created_at, CheckInModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]
