"""
Boarding Service Test Fixtures
"""

from typing import Awaitable, Callable, List
from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.service.boarding.app.command.change_trip_status_use_case import ChangeTripStatusUseCase
from src.service.boarding.app.command.confirm_boarding_use_case import ConfirmBoardingUseCase
from src.service.boarding.app.command.set_check_in_status_use_case import (
    SetCheckInStatusUseCase,
)
from src.service.boarding.app.query.get_boarding_stats_use_case import GetBoardingStatsUseCase
from src.service.boarding.app.query.get_trip_use_case import GetTripUseCase
from src.service.boarding.app.query.list_trip_passengers_use_case import (
    ListTripPassengersUseCase,
)
from src.service.boarding.app.query.stream_trip_live_updates_use_case import (
    StreamTripLiveUpdatesUseCase,
)
from src.service.reservation.app.command.claim_seats_use_case import ClaimSeatsUseCase
from src.service.reservation.app.command.confirm_claim_use_case import ConfirmClaimUseCase
from src.service.reservation.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.driven_adapter.broadcaster.live_update_broadcaster_impl import (
    LiveUpdateBroadcasterImpl,
)
from test.shared.utils import FakeClock


__all__ = [
    'book_seats',
    'change_trip_status_use_case',
    'confirm_boarding_use_case',
    'get_boarding_stats_use_case',
    'get_trip_use_case',
    'list_trip_passengers_use_case',
    'set_check_in_status_use_case',
    'stream_trip_live_updates_use_case',
]


BookSeats = Callable[..., Awaitable[Booking]]


@pytest.fixture
def book_seats(
    claim_seats_use_case: ClaimSeatsUseCase, confirm_claim_use_case: ConfirmClaimUseCase
) -> BookSeats:
    """Claim and confirm in one call, the way a paid checkout ends"""

    async def _book(
        *,
        trip_id: int,
        seat_ids: List[str],
        passenger_id: int = 7,
        passenger_name: str = 'Ana Souza',
    ) -> Booking:
        hold = await claim_seats_use_case.execute(
            trip_id=trip_id,
            seat_ids=seat_ids,
            passenger_id=passenger_id,
            passenger_name=passenger_name,
        )
        return await confirm_claim_use_case.execute(token=hold.token)

    return _book


@pytest.fixture
def change_trip_status_use_case(
    uow_factory: UnitOfWorkFactory,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    clock: FakeClock,
) -> ChangeTripStatusUseCase:
    return ChangeTripStatusUseCase(
        uow_factory=uow_factory,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        clock=clock,
    )


@pytest.fixture
def set_check_in_status_use_case(
    uow_factory: UnitOfWorkFactory,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    notification_publisher: AsyncMock,
    clock: FakeClock,
) -> SetCheckInStatusUseCase:
    return SetCheckInStatusUseCase(
        uow_factory=uow_factory,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        notification_publisher=notification_publisher,
        clock=clock,
    )


@pytest.fixture
def confirm_boarding_use_case(
    uow_factory: UnitOfWorkFactory, set_check_in_status_use_case: SetCheckInStatusUseCase
) -> ConfirmBoardingUseCase:
    return ConfirmBoardingUseCase(
        uow_factory=uow_factory, set_check_in_status_use_case=set_check_in_status_use_case
    )


@pytest.fixture
def get_trip_use_case(uow_factory: UnitOfWorkFactory) -> GetTripUseCase:
    return GetTripUseCase(uow_factory=uow_factory)


@pytest.fixture
def list_trip_passengers_use_case(uow_factory: UnitOfWorkFactory) -> ListTripPassengersUseCase:
    return ListTripPassengersUseCase(uow_factory=uow_factory)


@pytest.fixture
def get_boarding_stats_use_case(
    get_seat_map_use_case: GetSeatMapUseCase,
) -> GetBoardingStatsUseCase:
    return GetBoardingStatsUseCase(get_seat_map_use_case=get_seat_map_use_case)


@pytest.fixture
def stream_trip_live_updates_use_case(
    get_seat_map_use_case: GetSeatMapUseCase,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
) -> StreamTripLiveUpdatesUseCase:
    return StreamTripLiveUpdatesUseCase(
        get_seat_map_use_case=get_seat_map_use_case,
        live_update_broadcaster=live_update_broadcaster,
    )
