"""
Passenger notification events

Consumed by the external notification service (SMS / push); this service
only emits them.
"""

from datetime import datetime
from typing import Any, List, Optional

import attrs


@attrs.define(frozen=True)
class BookingConfirmedEvent:
    booking_id: str
    booking_reference: str
    trip_id: int
    passenger_id: int
    passenger_name: str
    seat_ids: List[str]
    occurred_at: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            'event_type': 'booking_confirmed',
            'booking_id': self.booking_id,
            'booking_reference': self.booking_reference,
            'trip_id': self.trip_id,
            'passenger_id': self.passenger_id,
            'passenger_name': self.passenger_name,
            'seat_ids': list(self.seat_ids),
            'occurred_at': self.occurred_at.isoformat(),
        }


@attrs.define(frozen=True)
class CheckInChangedEvent:
    booking_id: str
    booking_reference: str
    trip_id: int
    passenger_id: int
    status: str
    check_in_time: Optional[datetime]
    occurred_at: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            'event_type': 'check_in_changed',
            'booking_id': self.booking_id,
            'booking_reference': self.booking_reference,
            'trip_id': self.trip_id,
            'passenger_id': self.passenger_id,
            'status': self.status,
            'check_in_time': self.check_in_time.isoformat() if self.check_in_time else None,
            'occurred_at': self.occurred_at.isoformat(),
        }
