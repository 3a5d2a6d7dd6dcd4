from datetime import datetime
from typing import List, Optional

import attrs

from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


@attrs.define(frozen=True)
class PassengerView:
    """One row of the driver's passenger list"""

    booking_id: str
    booking_reference: str
    passenger_id: int
    passenger_name: str
    seat_ids: List[str]
    booking_status: BookingStatus
    check_in_status: CheckInStatus
    check_in_time: Optional[datetime] = None
    notes: Optional[str] = None
