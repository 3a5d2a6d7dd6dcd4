from typing import Self

from fastapi import Depends

from src.platform.logging.loguru_io import Logger
from src.service.boarding.app.dto.boarding_stats import BoardingStats
from src.service.reservation.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus


class GetBoardingStatsUseCase:
    """Seat counters shown above the driver's grid"""

    def __init__(self, *, get_seat_map_use_case: GetSeatMapUseCase) -> None:
        self.get_seat_map_use_case = get_seat_map_use_case

    @classmethod
    def depends(
        cls,
        get_seat_map_use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
    ) -> Self:
        return cls(get_seat_map_use_case=get_seat_map_use_case)

    @Logger.io
    async def execute(self, *, trip_id: int) -> BoardingStats:
        seat_map = await self.get_seat_map_use_case.execute(trip_id=trip_id)
        return BoardingStats(
            trip_id=trip_id,
            total=seat_map.total_seats,
            available=seat_map.count(SeatStatus.AVAILABLE),
            held=seat_map.count(SeatStatus.HELD),
            booked=seat_map.count(SeatStatus.BOOKED),
            checked_in=seat_map.count(SeatStatus.CHECKED_IN),
            no_show=seat_map.count(SeatStatus.NO_SHOW),
        )
