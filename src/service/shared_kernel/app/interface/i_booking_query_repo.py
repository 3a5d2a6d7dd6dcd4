from abc import ABC, abstractmethod
from typing import List, Optional, Set

from uuid_utils import UUID

from src.service.shared_kernel.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_by_reference(self, *, booking_reference: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_trip(self, *, trip_id: int, include_cancelled: bool = False) -> List[Booking]:
        """Bookings of a trip ordered by creation time"""
        pass

    @abstractmethod
    async def get_booked_seat_ids(self, *, trip_id: int) -> Set[str]:
        """Seats held by non-cancelled bookings"""
        pass

    @abstractmethod
    async def get_by_claim_token(self, *, claim_token: UUID) -> Optional[Booking]:
        pass
