"""
Reservation Service Test Fixtures

Use cases built by hand over the shared in-process adapters, so a test can
look at the hold store, the live stream or the clock the use case sees.
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.state.keyed_lock import KeyedLockRegistry
from src.service.boarding.app.command.create_trip_use_case import CreateTripUseCase
from src.service.boarding.domain.trip_entity import Trip
from src.service.reservation.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.reservation.app.command.claim_seats_use_case import ClaimSeatsUseCase
from src.service.reservation.app.command.confirm_claim_use_case import ConfirmClaimUseCase
from src.service.reservation.app.command.expire_seat_holds_use_case import (
    ExpireSeatHoldsUseCase,
)
from src.service.reservation.app.command.release_claim_use_case import ReleaseClaimUseCase
from src.service.reservation.app.query.get_occupied_seats_use_case import (
    GetOccupiedSeatsUseCase,
)
from src.service.reservation.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.reservation.driven_adapter.state.in_memory_seat_hold_store_impl import (
    InMemorySeatHoldStoreImpl,
)
from src.service.shared_kernel.driven_adapter.broadcaster.live_update_broadcaster_impl import (
    LiveUpdateBroadcasterImpl,
)
from test.shared.utils import FakeClock


__all__ = [
    'cancel_booking_use_case',
    'claim_seats_use_case',
    'confirm_claim_use_case',
    'create_trip_use_case',
    'expire_seat_holds_use_case',
    'get_occupied_seats_use_case',
    'get_seat_map_use_case',
    'release_claim_use_case',
    'trip',
]


@pytest.fixture
def create_trip_use_case(uow_factory: UnitOfWorkFactory, clock: FakeClock) -> CreateTripUseCase:
    return CreateTripUseCase(uow_factory=uow_factory, clock=clock)


@pytest.fixture
async def trip(create_trip_use_case: CreateTripUseCase, clock: FakeClock) -> Trip:
    """A scheduled 50-seat trip"""
    return await create_trip_use_case.execute(
        route_ref='SAO-RIO-0730',
        bus_plate='ABC1D23',
        capacity=50,
        departure_at=clock().replace(hour=7, minute=30),
    )


@pytest.fixture
def claim_seats_use_case(
    uow_factory: UnitOfWorkFactory,
    seat_hold_store: InMemorySeatHoldStoreImpl,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    clock: FakeClock,
) -> ClaimSeatsUseCase:
    return ClaimSeatsUseCase(
        uow_factory=uow_factory,
        seat_hold_store=seat_hold_store,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        clock=clock,
    )


@pytest.fixture
def confirm_claim_use_case(
    uow_factory: UnitOfWorkFactory,
    seat_hold_store: InMemorySeatHoldStoreImpl,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    notification_publisher: AsyncMock,
    clock: FakeClock,
) -> ConfirmClaimUseCase:
    return ConfirmClaimUseCase(
        uow_factory=uow_factory,
        seat_hold_store=seat_hold_store,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        notification_publisher=notification_publisher,
        clock=clock,
    )


@pytest.fixture
def release_claim_use_case(
    seat_hold_store: InMemorySeatHoldStoreImpl,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    clock: FakeClock,
) -> ReleaseClaimUseCase:
    return ReleaseClaimUseCase(
        seat_hold_store=seat_hold_store,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        clock=clock,
    )


@pytest.fixture
def cancel_booking_use_case(
    uow_factory: UnitOfWorkFactory,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    clock: FakeClock,
) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        uow_factory=uow_factory,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        clock=clock,
    )


@pytest.fixture
def get_occupied_seats_use_case(
    uow_factory: UnitOfWorkFactory,
    seat_hold_store: InMemorySeatHoldStoreImpl,
    clock: FakeClock,
) -> GetOccupiedSeatsUseCase:
    return GetOccupiedSeatsUseCase(
        uow_factory=uow_factory, seat_hold_store=seat_hold_store, clock=clock
    )


@pytest.fixture
def get_seat_map_use_case(
    uow_factory: UnitOfWorkFactory,
    seat_hold_store: InMemorySeatHoldStoreImpl,
    clock: FakeClock,
) -> GetSeatMapUseCase:
    return GetSeatMapUseCase(uow_factory=uow_factory, seat_hold_store=seat_hold_store, clock=clock)


@pytest.fixture
def expire_seat_holds_use_case(
    seat_hold_store: InMemorySeatHoldStoreImpl,
    lock_registry: KeyedLockRegistry,
    live_update_broadcaster: LiveUpdateBroadcasterImpl,
    clock: FakeClock,
) -> ExpireSeatHoldsUseCase:
    return ExpireSeatHoldsUseCase(
        seat_hold_store=seat_hold_store,
        lock_registry=lock_registry,
        live_update_broadcaster=live_update_broadcaster,
        clock=clock,
        retention_seconds=900,
    )
