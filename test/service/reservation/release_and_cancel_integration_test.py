import anyio
import pytest
import uuid_utils

from src.service.reservation.domain.seat_hold_entity import HoldStatus
from src.service.shared_kernel.domain.boarding_errors import (
    BookingCancelledError,
    BookingNotFoundError,
)
from src.service.shared_kernel.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


class TestReleaseClaim:
    @pytest.mark.asyncio
    async def test_release_frees_seats_now(
        self, claim_seats_use_case, release_claim_use_case, seat_hold_store, trip, clock
    ):
        hold = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['6A'], passenger_id=7, passenger_name='Ana Souza'
        )

        await release_claim_use_case.execute(token=hold.token)

        assert (await seat_hold_store.get(token=hold.token)).status == HoldStatus.RELEASED
        again = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['6A'], passenger_id=8, passenger_name='Bruno Lima'
        )
        assert again.seat_ids == ['6A']

    @pytest.mark.asyncio
    async def test_release_is_a_no_op_for_unknown_and_confirmed_claims(
        self, release_claim_use_case, book_seats, get_occupied_seats_use_case, seat_hold_store, trip
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['6B'])

        await release_claim_use_case.execute(token=uuid_utils.uuid7())
        await release_claim_use_case.execute(token=booking.claim_token)

        assert (await seat_hold_store.get(token=booking.claim_token)).status == HoldStatus.CONFIRMED
        assert await get_occupied_seats_use_case.execute(trip_id=trip.id) == {'6B'}

    @pytest.mark.asyncio
    async def test_release_publishes_seat_released(
        self, claim_seats_use_case, release_claim_use_case, live_update_broadcaster, trip
    ):
        hold = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['7C', '7D'], passenger_id=7, passenger_name='Ana Souza'
        )
        stream = await live_update_broadcaster.subscribe(trip_id=trip.id)

        await release_claim_use_case.execute(token=hold.token)

        with anyio.fail_after(1.0):
            event = await stream.receive()
        assert event['event_type'] == 'seat_released'
        assert event['seat_ids'] == ['7C', '7D']


class TestCancelBooking:
    @pytest.mark.asyncio
    async def test_cancel_frees_seats(
        self, cancel_booking_use_case, book_seats, claim_seats_use_case, trip, clock
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['8A', '8B'])
        clock.advance(60)

        cancelled = await cancel_booking_use_case.execute(booking_id=booking.id)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancelled_at == clock()
        hold = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['8A'], passenger_id=8, passenger_name='Bruno Lima'
        )
        assert hold.seat_ids == ['8A']

    @pytest.mark.asyncio
    async def test_cancel_twice_is_harmless(self, cancel_booking_use_case, book_seats, trip):
        booking = await book_seats(trip_id=trip.id, seat_ids=['8C'])

        first = await cancel_booking_use_case.execute(booking_id=booking.id)
        second = await cancel_booking_use_case.execute(booking_id=booking.id)

        assert second.status == BookingStatus.CANCELLED
        assert second.cancelled_at == first.cancelled_at

    @pytest.mark.asyncio
    async def test_rebooked_seat_after_cancel(
        self, cancel_booking_use_case, book_seats, list_trip_passengers_use_case, trip
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['9A'])
        await cancel_booking_use_case.execute(booking_id=booking.id)

        rebooked = await book_seats(trip_id=trip.id, seat_ids=['9A'], passenger_name='Bruno Lima')

        passengers = await list_trip_passengers_use_case.execute(trip_id=trip.id)
        assert [p.booking_id for p in passengers] == [str(rebooked.id)]

    @pytest.mark.asyncio
    async def test_checked_in_booking_can_be_cancelled(
        self,
        cancel_booking_use_case,
        book_seats,
        set_check_in_status_use_case,
        get_occupied_seats_use_case,
        trip,
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['9B'])
        await set_check_in_status_use_case.execute(
            trip_id=trip.id, booking_id=booking.id, status=CheckInStatus.CHECKED_IN
        )

        cancelled = await cancel_booking_use_case.execute(booking_id=booking.id)

        assert cancelled.status == BookingStatus.CANCELLED
        assert await get_occupied_seats_use_case.execute(trip_id=trip.id) == set()

    @pytest.mark.asyncio
    async def test_cancel_during_check_in_leaves_booking_cancelled(
        self,
        cancel_booking_use_case,
        set_check_in_status_use_case,
        claim_seats_use_case,
        book_seats,
        uow_factory,
        trip,
        monkeypatch,
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['1A'])
        original_get_by_id = BookingQueryRepoImpl.get_by_id
        cancel_started = False

        async def get_by_id_then_cancel(self, *, booking_id):
            nonlocal cancel_started
            found = await original_get_by_id(self, booking_id=booking_id)
            if not cancel_started:
                # Check-in has read the booking; let cancel run before it writes
                cancel_started = True
                tg.start_soon(cancel)
                await anyio.sleep(0.05)
            return found

        async def cancel():
            await cancel_booking_use_case.execute(booking_id=booking.id)

        monkeypatch.setattr(BookingQueryRepoImpl, 'get_by_id', get_by_id_then_cancel)
        with anyio.fail_after(5.0):
            async with anyio.create_task_group() as tg:
                record = await set_check_in_status_use_case.execute(
                    trip_id=trip.id, booking_id=booking.id, status=CheckInStatus.CHECKED_IN
                )

        async with uow_factory() as uow:
            final = await uow.booking_query_repo.get_by_id(booking_id=booking.id)
        assert record.status == CheckInStatus.CHECKED_IN
        assert final.status == BookingStatus.CANCELLED
        assert not final.is_active
        again = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['1A'], passenger_id=8, passenger_name='Bruno Lima'
        )
        assert again.seat_ids == ['1A']

    @pytest.mark.asyncio
    async def test_stale_write_cannot_revive_cancelled_booking(
        self, cancel_booking_use_case, book_seats, uow_factory, trip, clock
    ):
        booking = await book_seats(trip_id=trip.id, seat_ids=['8C'])
        await cancel_booking_use_case.execute(booking_id=booking.id)
        stale = booking.mirror_check_in(check_in_status=CheckInStatus.CHECKED_IN, now=clock())

        async with uow_factory() as uow:
            with pytest.raises(BookingCancelledError):
                await uow.booking_command_repo.update(booking=stale)

    @pytest.mark.asyncio
    async def test_cancel_unknown_booking(self, cancel_booking_use_case, database):
        with pytest.raises(BookingNotFoundError):
            await cancel_booking_use_case.execute(booking_id=uuid_utils.uuid7())
