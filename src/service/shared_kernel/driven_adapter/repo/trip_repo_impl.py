from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.boarding.domain.trip_entity import Trip
from src.service.shared_kernel.app.interface.i_trip_repo import ITripRepo
from src.service.shared_kernel.domain.boarding_errors import TripNotFoundError
from src.service.shared_kernel.domain.enum.trip_status import TripStatus
from src.service.shared_kernel.driven_adapter.model.trip_model import TripModel


class TripRepoImpl(ITripRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(model: TripModel) -> Trip:
        return Trip(
            id=model.id,
            route_ref=model.route_ref,
            bus_plate=model.bus_plate,
            capacity=model.capacity,
            company_id=model.company_id,
            status=TripStatus(model.status),
            departure_at=model.departure_at,
            arrival_at=model.arrival_at,
            actual_departure_at=model.actual_departure_at,
            actual_arrival_at=model.actual_arrival_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @Logger.io
    async def create(self, *, trip: Trip) -> Trip:
        model = TripModel(
            route_ref=trip.route_ref,
            bus_plate=trip.bus_plate,
            capacity=trip.capacity,
            company_id=trip.company_id,
            status=trip.status.value,
            departure_at=trip.departure_at,
            arrival_at=trip.arrival_at,
            created_at=trip.created_at,
            updated_at=trip.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def get_by_id(self, *, trip_id: int) -> Optional[Trip]:
        model = await self.session.get(TripModel, trip_id)
        return self._to_entity(model) if model else None

    @Logger.io
    async def update(self, *, trip: Trip) -> Trip:
        model = await self.session.get(TripModel, trip.trip_id)
        if model is None:
            raise TripNotFoundError(trip.trip_id)

        model.status = trip.status.value
        model.actual_departure_at = trip.actual_departure_at
        model.actual_arrival_at = trip.actual_arrival_at
        model.updated_at = trip.updated_at  # type: ignore[assignment]
        await self.session.flush()
        return self._to_entity(model)
