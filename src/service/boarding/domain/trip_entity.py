from datetime import datetime
from typing import Dict, FrozenSet, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.boarding_errors import (
    InvalidCapacityError,
    InvalidTripTransitionError,
    TripClosedForBookingError,
    TripFinalizedError,
)
from src.service.shared_kernel.domain.enum.trip_status import TripStatus


# scheduled -> boarding -> departed -> arrived; cancelled from any non-terminal state
ALLOWED_TRIP_TRANSITIONS: Dict[TripStatus, FrozenSet[TripStatus]] = {
    TripStatus.SCHEDULED: frozenset(
        {TripStatus.BOARDING, TripStatus.DEPARTED, TripStatus.CANCELLED}
    ),
    TripStatus.BOARDING: frozenset({TripStatus.DEPARTED, TripStatus.CANCELLED}),
    TripStatus.DEPARTED: frozenset({TripStatus.ARRIVED, TripStatus.CANCELLED}),
    TripStatus.ARRIVED: frozenset(),
    TripStatus.CANCELLED: frozenset(),
}


@attrs.define
class Trip:
    route_ref: str
    bus_plate: str
    capacity: int
    departure_at: datetime
    arrival_at: Optional[datetime] = None
    status: TripStatus = TripStatus.SCHEDULED
    company_id: Optional[int] = None
    id: Optional[int] = None
    actual_departure_at: Optional[datetime] = None
    actual_arrival_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        route_ref: str,
        bus_plate: str,
        capacity: int,
        departure_at: datetime,
        arrival_at: Optional[datetime] = None,
        company_id: Optional[int] = None,
        now: datetime,
    ) -> 'Trip':
        if capacity <= 0:
            raise InvalidCapacityError(capacity)
        if not route_ref.strip():
            raise DomainError('route_ref must not be empty')
        if not bus_plate.strip():
            raise DomainError('bus_plate must not be empty')
        if arrival_at is not None and arrival_at <= departure_at:
            raise DomainError('arrival_at must be after departure_at')

        return cls(
            route_ref=route_ref.strip(),
            bus_plate=bus_plate.strip().upper(),
            capacity=capacity,
            departure_at=departure_at,
            arrival_at=arrival_at,
            company_id=company_id,
            status=TripStatus.SCHEDULED,
            created_at=now,
            updated_at=now,
        )

    @property
    def trip_id(self) -> int:
        assert self.id is not None, 'Trip has not been persisted yet'
        return self.id

    def ensure_accepts_bookings(self) -> None:
        if not self.status.accepts_bookings:
            raise TripClosedForBookingError(trip_id=self.trip_id, status=self.status.value)

    def ensure_boarding_open(self) -> None:
        """Check-in records can change until the trip is arrived or cancelled"""
        if self.status.is_terminal:
            raise TripFinalizedError(trip_id=self.trip_id, status=self.status.value)

    def can_transition_to(self, target: TripStatus) -> bool:
        return target in ALLOWED_TRIP_TRANSITIONS[self.status]

    @Logger.io
    def transition_to(self, *, target: TripStatus, now: datetime) -> 'Trip':
        """
        Move the trip along its lifecycle

        Returns ``self`` unchanged when the trip already is in ``target``.

        Raises:
            InvalidTripTransitionError: out-of-order move, e.g. arrive before depart
        """
        if self.status == target:
            return self
        if not self.can_transition_to(target):
            raise InvalidTripTransitionError(
                trip_id=self.trip_id, current=self.status.value, target=target.value
            )

        changes: dict = {'status': target, 'updated_at': now}
        if target == TripStatus.DEPARTED:
            changes['actual_departure_at'] = now
        elif target == TripStatus.ARRIVED:
            changes['actual_arrival_at'] = now
        return attrs.evolve(self, **changes)
