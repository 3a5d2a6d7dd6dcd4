from datetime import datetime, timezone

import pytest
import uuid_utils

from src.service.shared_kernel.domain.boarding_errors import InvalidSeatError
from src.service.shared_kernel.domain.entity.booking_entity import (
    Booking,
    generate_booking_reference,
)
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


NOW = datetime(2025, 1, 10, 6, 0, tzinfo=timezone.utc)


def _booking(**overrides) -> Booking:
    kwargs = {
        'id': uuid_utils.uuid7(),
        'trip_id': 1,
        'passenger_id': 7,
        'passenger_name': 'Ana Souza',
        'seat_ids': ['1A'],
        'claim_token': uuid_utils.uuid7(),
        'now': NOW,
    }
    kwargs.update(overrides)
    return Booking.create(**kwargs)


@pytest.mark.unit
class TestBookingEntity:
    def test_create_is_pending_and_unpaid(self):
        booking = _booking()

        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.booking_reference.startswith('BK')
        assert len(booking.booking_reference) == 10

    def test_create_rejects_empty_and_duplicate_seats(self):
        with pytest.raises(InvalidSeatError):
            _booking(seat_ids=[])
        with pytest.raises(InvalidSeatError, match='Duplicate'):
            _booking(seat_ids=['1A', '1A'])

    def test_mark_as_confirmed(self):
        booking = _booking().mark_as_confirmed(now=NOW)

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.payment_status == PaymentStatus.PAID

    def test_cancel_sets_timestamp_and_is_repeatable(self):
        cancelled = _booking().mark_as_confirmed(now=NOW).cancel(now=NOW)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancelled_at == NOW
        assert not cancelled.is_active
        assert cancelled.cancel(now=NOW) is cancelled

    def test_checked_in_booking_can_be_cancelled(self):
        booking = _booking().mirror_check_in(check_in_status=CheckInStatus.CHECKED_IN, now=NOW)

        cancelled = booking.cancel(now=NOW)

        assert cancelled.status == BookingStatus.CANCELLED
        assert not cancelled.is_active

    def test_mirror_check_in(self):
        booking = _booking().mark_as_confirmed(now=NOW)

        no_show = booking.mirror_check_in(check_in_status=CheckInStatus.NO_SHOW, now=NOW)

        assert no_show.status == BookingStatus.NO_SHOW
        assert no_show.check_in_status == CheckInStatus.NO_SHOW
        assert no_show.mirror_check_in(check_in_status=CheckInStatus.NO_SHOW, now=NOW) is no_show

    def test_matches_ticket_by_reference_or_id(self):
        booking = _booking()

        assert booking.matches_ticket(booking.booking_reference.lower())
        assert booking.matches_ticket(f'  {booking.booking_reference} ')
        assert booking.matches_ticket(str(booking.id).upper())
        assert not booking.matches_ticket('BK00000000')

    def test_generated_references_differ(self):
        assert len({generate_booking_reference() for _ in range(50)}) == 50
