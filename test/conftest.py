"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module is imported
- A fresh in-memory SQLite database per test (aiosqlite + StaticPool)
- A controllable clock and in-process adapters for use case tests
- The HTTP client over the test app, with container providers overridden
- Service fixtures (imported from fixture_loader.py)

Architecture:
- Unit tests (marked ``unit``): pure domain, no database
- Integration tests: real SQLAlchemy repositories against SQLite
- API tests: FastAPI TestClient over test/test_main.py
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
    os.environ['NOTIFICATION_PUBLISHER'] = 'log'
    os.environ.setdefault('SEAT_HOLD_SWEEP_INTERVAL_SECONDS', '0.05')
    os.environ.setdefault('TRIP_LOCK_TIMEOUT_SECONDS', '1.0')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import (  # noqa: E402
    SqlAlchemyUnitOfWork,
    UnitOfWorkFactory,
)
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl  # noqa: E402
from src.platform.state.keyed_lock import KeyedLockRegistry  # noqa: E402
from src.service.reservation.driven_adapter.state.in_memory_seat_hold_store_impl import (  # noqa: E402
    InMemorySeatHoldStoreImpl,
)
from src.service.shared_kernel.driven_adapter.broadcaster.live_update_broadcaster_impl import (  # noqa: E402
    LiveUpdateBroadcasterImpl,
)
from test.shared.utils import FakeClock  # noqa: E402


TEST_START_TIME = datetime(2025, 1, 10, 6, 0, tzinfo=timezone.utc)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if 'unit' not in [m.name for m in item.iter_markers()]:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Core Fixtures
# =============================================================================
@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=TEST_START_TIME)


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(url='sqlite+aiosqlite://')
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> UnitOfWorkFactory:
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session)


@pytest.fixture
def lock_registry() -> KeyedLockRegistry:
    return KeyedLockRegistry(timeout_seconds=1.0)


@pytest.fixture
def seat_hold_store() -> InMemorySeatHoldStoreImpl:
    return InMemorySeatHoldStoreImpl()


@pytest.fixture
def event_broadcaster() -> InMemoryEventBroadcasterImpl:
    return InMemoryEventBroadcasterImpl(max_buffer_size=100)


@pytest.fixture
def live_update_broadcaster(
    event_broadcaster: InMemoryEventBroadcasterImpl,
) -> LiveUpdateBroadcasterImpl:
    return LiveUpdateBroadcasterImpl(broadcaster=event_broadcaster)


@pytest.fixture
def notification_publisher() -> AsyncMock:
    return AsyncMock()


# =============================================================================
# HTTP Client
# =============================================================================
@pytest.fixture
def client(clock: FakeClock, notification_publisher: AsyncMock) -> Generator[TestClient, Any, None]:
    from test.test_main import app

    container.reset_singletons()
    container.database.override(providers.Singleton(Database, url='sqlite+aiosqlite://'))
    container.clock.override(providers.Object(clock))
    container.notification_publisher.override(providers.Object(notification_publisher))
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        container.database.reset_override()
        container.clock.reset_override()
        container.notification_publisher.reset_override()
        container.reset_singletons()


# =============================================================================
# Load service fixtures
# =============================================================================
from test.fixture_loader import *  # noqa: E402, F401, F403
