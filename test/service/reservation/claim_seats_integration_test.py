import anyio
import pytest

from src.platform.exception.exceptions import DomainError
from src.service.reservation.domain.seat_hold_entity import HoldStatus
from src.service.shared_kernel.domain.boarding_errors import (
    ClaimExpiredError,
    InvalidSeatError,
    SeatsUnavailableError,
    TripClosedForBookingError,
    TripNotFoundError,
)
from src.service.shared_kernel.domain.enum.trip_status import TripStatus


class TestClaimSeats:
    @pytest.mark.asyncio
    async def test_claim_holds_normalized_seats(self, claim_seats_use_case, seat_hold_store, trip, clock):
        hold = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['1a', ' 1B '], passenger_id=7, passenger_name=' Ana Souza '
        )

        assert hold.seat_ids == ['1A', '1B']
        assert hold.status == HoldStatus.ACTIVE
        assert hold.passenger_name == 'Ana Souza'
        assert (hold.expires_at - clock()).total_seconds() == 600
        assert await seat_hold_store.held_seat_ids(trip_id=trip.id, now=clock()) == {'1A', '1B'}

    @pytest.mark.asyncio
    async def test_hold_duration_is_capped(self, claim_seats_use_case, trip, clock):
        hold = await claim_seats_use_case.execute(
            trip_id=trip.id,
            seat_ids=['1A'],
            passenger_id=7,
            passenger_name='Ana Souza',
            hold_duration_seconds=99999,
        )

        assert (hold.expires_at - clock()).total_seconds() == 1800

    @pytest.mark.asyncio
    async def test_negative_hold_duration_is_rejected(self, claim_seats_use_case, trip):
        with pytest.raises(DomainError):
            await claim_seats_use_case.execute(
                trip_id=trip.id,
                seat_ids=['1A'],
                passenger_id=7,
                passenger_name='Ana Souza',
                hold_duration_seconds=-1,
            )

    @pytest.mark.asyncio
    async def test_claim_is_all_or_nothing(self, claim_seats_use_case, seat_hold_store, trip, clock):
        await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['2A'], passenger_id=7, passenger_name='Ana Souza'
        )

        with pytest.raises(SeatsUnavailableError) as exc_info:
            await claim_seats_use_case.execute(
                trip_id=trip.id,
                seat_ids=['1A', '2A', '1B'],
                passenger_id=8,
                passenger_name='Bruno Lima',
            )

        assert exc_info.value.conflicting_seats == ['2A']
        assert await seat_hold_store.held_seat_ids(trip_id=trip.id, now=clock()) == {'2A'}

    @pytest.mark.asyncio
    async def test_booked_seat_cannot_be_claimed(self, claim_seats_use_case, book_seats, trip):
        await book_seats(trip_id=trip.id, seat_ids=['3C'])

        with pytest.raises(SeatsUnavailableError) as exc_info:
            await claim_seats_use_case.execute(
                trip_id=trip.id, seat_ids=['3C', '3D'], passenger_id=8, passenger_name='Bruno Lima'
            )

        assert exc_info.value.conflicting_seats == ['3C']

    @pytest.mark.asyncio
    async def test_lapsed_hold_does_not_block(self, claim_seats_use_case, trip, clock):
        await claim_seats_use_case.execute(
            trip_id=trip.id,
            seat_ids=['1A'],
            passenger_id=7,
            passenger_name='Ana Souza',
            hold_duration_seconds=30,
        )
        clock.advance(30)

        hold = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['1A'], passenger_id=8, passenger_name='Bruno Lima'
        )

        assert hold.passenger_id == 8

    @pytest.mark.asyncio
    async def test_zero_second_hold_lapses_immediately(
        self, claim_seats_use_case, confirm_claim_use_case, get_occupied_seats_use_case, trip
    ):
        first = await claim_seats_use_case.execute(
            trip_id=trip.id,
            seat_ids=['1A'],
            passenger_id=7,
            passenger_name='Ana Souza',
            hold_duration_seconds=0,
        )

        assert first.expires_at == first.created_at
        assert await get_occupied_seats_use_case.execute(trip_id=trip.id) == set()
        second = await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['1A'], passenger_id=8, passenger_name='Bruno Lima'
        )
        assert second.seat_ids == ['1A']
        with pytest.raises(ClaimExpiredError):
            await confirm_claim_use_case.execute(token=first.token)

    @pytest.mark.asyncio
    async def test_concurrent_claims_on_same_seat(self, claim_seats_use_case, trip):
        outcomes: list[str] = []

        async def attempt(passenger_id: int) -> None:
            try:
                await claim_seats_use_case.execute(
                    trip_id=trip.id,
                    seat_ids=['5A', '5B'],
                    passenger_id=passenger_id,
                    passenger_name=f'Passenger {passenger_id}',
                )
                outcomes.append('claimed')
            except SeatsUnavailableError:
                outcomes.append('conflict')

        async with anyio.create_task_group() as tg:
            for passenger_id in range(5):
                tg.start_soon(attempt, passenger_id)

        assert sorted(outcomes) == ['claimed', 'conflict', 'conflict', 'conflict', 'conflict']

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'seat_ids',
        [[], ['1A', '1a'], ['13C'], ['0A'], ['Z9'], ['1A'] * 9],
    )
    async def test_invalid_seat_requests(self, claim_seats_use_case, trip, seat_ids):
        with pytest.raises(InvalidSeatError):
            await claim_seats_use_case.execute(
                trip_id=trip.id, seat_ids=seat_ids, passenger_id=7, passenger_name='Ana Souza'
            )

    @pytest.mark.asyncio
    async def test_unknown_trip(self, claim_seats_use_case, database):
        with pytest.raises(TripNotFoundError):
            await claim_seats_use_case.execute(
                trip_id=999, seat_ids=['1A'], passenger_id=7, passenger_name='Ana Souza'
            )

    @pytest.mark.asyncio
    async def test_departed_trip_rejects_claims(
        self, claim_seats_use_case, change_trip_status_use_case, trip
    ):
        await change_trip_status_use_case.execute(trip_id=trip.id, target=TripStatus.DEPARTED)

        with pytest.raises(TripClosedForBookingError):
            await claim_seats_use_case.execute(
                trip_id=trip.id, seat_ids=['1A'], passenger_id=7, passenger_name='Ana Souza'
            )

    @pytest.mark.asyncio
    async def test_claim_is_published_live(self, claim_seats_use_case, live_update_broadcaster, trip):
        stream = await live_update_broadcaster.subscribe(trip_id=trip.id)

        await claim_seats_use_case.execute(
            trip_id=trip.id, seat_ids=['4B'], passenger_id=7, passenger_name='Ana Souza'
        )

        with anyio.fail_after(1.0):
            event = await stream.receive()
        assert event['event_type'] == 'seat_claimed'
        assert event['seat_ids'] == ['4B']
