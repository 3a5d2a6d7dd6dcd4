import attrs

from src.service.boarding.domain.check_in_entity import CheckInRecord
from src.service.shared_kernel.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BoardingResult:
    """Outcome of a ticket scan: whose ticket it was and the resulting check-in"""

    booking: Booking
    check_in: CheckInRecord
