from datetime import datetime, timedelta
from enum import StrEnum
from typing import List, Optional

import attrs
from uuid_utils import UUID


class HoldStatus(StrEnum):
    ACTIVE = 'active'
    CONFIRMED = 'confirmed'
    RELEASED = 'released'
    EXPIRED = 'expired'


@attrs.define
class SeatHold:
    """
    Short-lived claim on seats while the passenger pays

    Lives in memory only. An ACTIVE hold stops blocking seats the moment
    ``expires_at`` passes, whether or not the sweeper has visited it yet.
    """

    token: UUID
    trip_id: int
    seat_ids: List[str]
    passenger_id: int
    passenger_name: str
    created_at: datetime
    expires_at: datetime
    status: HoldStatus = HoldStatus.ACTIVE
    booking_id: Optional[UUID] = None
    finished_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        token: UUID,
        trip_id: int,
        seat_ids: List[str],
        passenger_id: int,
        passenger_name: str,
        hold_seconds: int,
        now: datetime,
    ) -> 'SeatHold':
        return cls(
            token=token,
            trip_id=trip_id,
            seat_ids=list(seat_ids),
            passenger_id=passenger_id,
            passenger_name=passenger_name,
            created_at=now,
            expires_at=now + timedelta(seconds=hold_seconds),
        )

    def is_active(self, now: datetime) -> bool:
        return self.status == HoldStatus.ACTIVE and now < self.expires_at

    def is_lapsed(self, now: datetime) -> bool:
        """ACTIVE on paper but past its expiry"""
        return self.status == HoldStatus.ACTIVE and now >= self.expires_at

    def confirm(self, *, booking_id: UUID, now: datetime) -> 'SeatHold':
        return attrs.evolve(
            self, status=HoldStatus.CONFIRMED, booking_id=booking_id, finished_at=now
        )

    def release(self, *, now: datetime) -> 'SeatHold':
        return attrs.evolve(self, status=HoldStatus.RELEASED, finished_at=now)

    def expire(self, *, now: datetime) -> 'SeatHold':
        return attrs.evolve(self, status=HoldStatus.EXPIRED, finished_at=now)
