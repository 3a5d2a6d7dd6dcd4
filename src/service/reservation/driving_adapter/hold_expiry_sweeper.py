import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.expire_seat_holds_use_case import (
    ExpireSeatHoldsUseCase,
)


class HoldExpirySweeper:
    """Background loop that expires lapsed seat holds and purges finished ones"""

    def __init__(
        self, *, use_case: ExpireSeatHoldsUseCase, interval_seconds: float = 5.0
    ) -> None:
        self.use_case = use_case
        self.interval_seconds = interval_seconds

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self.run)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'⌛ [SWEEPER] Started (every {self.interval_seconds}s)')

    async def run(self) -> None:
        while True:
            await self.sweep_once()
            await anyio.sleep(self.interval_seconds)

    async def sweep_once(self) -> int:
        """One pass; a failing pass is logged and the loop carries on"""
        try:
            return await self.use_case.execute()
        except Exception as e:
            Logger.base.error(f'❌ [SWEEPER] Sweep failed: {type(e).__name__}: {e}')
            return 0
