from datetime import datetime
import secrets
import string
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.boarding_errors import InvalidSeatError
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


BOOKING_REFERENCE_PREFIX = 'BK'
_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def generate_booking_reference() -> str:
    """Human-readable reference printed on the ticket, e.g. BK7Q2M9XA4"""
    return BOOKING_REFERENCE_PREFIX + ''.join(
        secrets.choice(_REFERENCE_ALPHABET) for _ in range(8)
    )


@attrs.define
class Booking:
    id: UUID
    trip_id: int
    passenger_id: int
    passenger_name: str
    seat_ids: List[str]
    booking_reference: str
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    claim_token: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        trip_id: int,
        passenger_id: int,
        passenger_name: str,
        seat_ids: List[str],
        claim_token: Optional[UUID],
        now: datetime,
    ) -> 'Booking':
        if not seat_ids:
            raise InvalidSeatError('A booking needs at least one seat')
        if len(set(seat_ids)) != len(seat_ids):
            raise InvalidSeatError(f'Duplicate seats in booking: {seat_ids}')

        return cls(
            id=id,
            trip_id=trip_id,
            passenger_id=passenger_id,
            passenger_name=passenger_name,
            seat_ids=list(seat_ids),
            booking_reference=generate_booking_reference(),
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            claim_token=claim_token,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED

    @property
    def check_in_status(self) -> CheckInStatus:
        if self.status == BookingStatus.CHECKED_IN:
            return CheckInStatus.CHECKED_IN
        if self.status == BookingStatus.NO_SHOW:
            return CheckInStatus.NO_SHOW
        return CheckInStatus.PENDING

    @Logger.io
    def mark_as_confirmed(self, *, now: datetime) -> 'Booking':
        """Payment went through: the seats now belong to this booking"""
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
            updated_at=now,
        )

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            return self
        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            cancelled_at=now,
            updated_at=now,
        )

    def mirror_check_in(self, *, check_in_status: CheckInStatus, now: datetime) -> 'Booking':
        status = BookingStatus(check_in_status.value)
        if status == self.status:
            return self
        return attrs.evolve(self, status=status, updated_at=now)

    def matches_ticket(self, ticket_id: str) -> bool:
        """A scanned ticket is either the booking reference or the booking id"""
        code = ticket_id.strip()
        return code.upper() == self.booking_reference or code.lower() == str(self.id)
