from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.boarding.domain.trip_entity import Trip
from src.service.shared_kernel.domain.boarding_errors import TripNotFoundError


class GetTripUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def execute(self, *, trip_id: int) -> Trip:
        async with self.uow_factory() as uow:
            trip = await uow.trip_repo.get_by_id(trip_id=trip_id)
        if trip is None:
            raise TripNotFoundError(trip_id)
        return trip
