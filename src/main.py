"""
Production FastAPI Application

Seat reservation, boarding and live trip updates in one process,
plus the background hold expiry sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.event_publisher import close_producer
from src.platform.observability.tracing import TracingConfig
from src.service.reservation.app.command.expire_seat_holds_use_case import (
    ExpireSeatHoldsUseCase,
)
from src.service.reservation.driving_adapter.hold_expiry_sweeper import HoldExpirySweeper


def build_hold_expiry_sweeper() -> HoldExpirySweeper:
    use_case = ExpireSeatHoldsUseCase(
        seat_hold_store=container.seat_hold_store(),
        lock_registry=container.lock_registry(),
        live_update_broadcaster=container.live_update_broadcaster(),
        clock=container.clock(),
        retention_seconds=settings.SEAT_HOLD_RETENTION_SECONDS,
    )
    return HoldExpirySweeper(
        use_case=use_case, interval_seconds=settings.SEAT_HOLD_SWEEP_INTERVAL_SECONDS
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Boarding Service] Starting up...')

    tracing = TracingConfig(service_name='bus-boarding')
    tracing.setup()
    Logger.base.info('📊 [Boarding Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Boarding Service] Dependency injection wired')

    database = container.database()
    await database.create_tables()
    tracing.instrument_sqlalchemy(engine=database.engine)
    Logger.base.info('🗄️  [Boarding Service] Database ready + instrumented')

    async with anyio.create_task_group() as tg:
        await build_hold_expiry_sweeper().start(task_group=tg)
        Logger.base.info('✅ [Boarding Service] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Boarding Service] Shutting down...')
        tg.cancel_scope.cancel()

    # Flush and close Kafka producer before shutdown
    try:
        await close_producer()
        Logger.base.info('📤 [Boarding Service] Kafka producer closed')
    except Exception as e:
        Logger.base.error(f'❌ [Boarding Service] Failed to close Kafka producer: {e}')

    await database.dispose()
    Logger.base.info('🗄️  [Boarding Service] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Boarding Service] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Boarding Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
