from datetime import datetime
from typing import Any, List, Optional

import attrs

from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


@attrs.define(frozen=True)
class LiveUpdateEvent:
    """
    One change on a trip, pushed to every live viewer of that trip

    - seat_claimed / seat_released / seat_booked carry seat_ids
    - check_in_changed carries booking_id, seat_ids and check_in_status
    - trip_status_changed carries trip_status
    """

    event_type: LiveEventType
    trip_id: int
    occurred_at: datetime
    seat_ids: List[str] = attrs.field(factory=list)
    booking_id: Optional[str] = None
    check_in_status: Optional[str] = None
    trip_status: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'event_type': self.event_type.value,
            'trip_id': self.trip_id,
            'occurred_at': self.occurred_at.isoformat(),
            'seat_ids': list(self.seat_ids),
        }
        if self.booking_id is not None:
            data['booking_id'] = self.booking_id
        if self.check_in_status is not None:
            data['check_in_status'] = self.check_in_status
        if self.trip_status is not None:
            data['trip_status'] = self.trip_status
        return data
