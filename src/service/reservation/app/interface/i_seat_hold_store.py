from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Set

from uuid_utils import UUID

from src.service.reservation.domain.seat_hold_entity import SeatHold


class ISeatHoldStore(ABC):
    """
    Store for seat holds (claims awaiting payment)

    Holds are ephemeral; finished ones are kept for a retention window so a
    late confirm can tell "expired" apart from "never existed".
    """

    @abstractmethod
    async def add(self, *, hold: SeatHold) -> None:
        pass

    @abstractmethod
    async def get(self, *, token: UUID) -> Optional[SeatHold]:
        pass

    @abstractmethod
    async def save(self, *, hold: SeatHold) -> None:
        """Replace the stored hold with the same token"""
        pass

    @abstractmethod
    async def active_holds(self, *, trip_id: int, now: datetime) -> List[SeatHold]:
        pass

    @abstractmethod
    async def held_seat_ids(self, *, trip_id: int, now: datetime) -> Set[str]:
        pass

    @abstractmethod
    async def lapsed_holds(self, *, now: datetime) -> List[SeatHold]:
        """ACTIVE holds whose expiry has passed, across all trips"""
        pass

    @abstractmethod
    async def purge_finished(self, *, finished_before: datetime) -> int:
        pass
