from abc import ABC, abstractmethod
from typing import Optional

from src.service.boarding.domain.trip_entity import Trip


class ITripRepo(ABC):
    @abstractmethod
    async def create(self, *, trip: Trip) -> Trip:
        pass

    @abstractmethod
    async def get_by_id(self, *, trip_id: int) -> Optional[Trip]:
        pass

    @abstractmethod
    async def update(self, *, trip: Trip) -> Trip:
        """Persist status and the actual departure/arrival stamps"""
        pass
