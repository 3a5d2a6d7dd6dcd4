from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.boarding.domain.check_in_entity import CheckInRecord


class ICheckInRepo(ABC):
    @abstractmethod
    async def get(self, *, trip_id: int, booking_id: UUID) -> Optional[CheckInRecord]:
        pass

    @abstractmethod
    async def upsert(self, *, record: CheckInRecord) -> CheckInRecord:
        """Insert or update the single record of (trip_id, booking_id)"""
        pass

    @abstractmethod
    async def list_by_trip(self, *, trip_id: int) -> List[CheckInRecord]:
        pass
