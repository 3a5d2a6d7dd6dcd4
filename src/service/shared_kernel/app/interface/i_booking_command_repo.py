from abc import ABC, abstractmethod

from src.service.shared_kernel.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """Repository interface for booking writes"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert the booking and one active row per seat

        Raises:
            SeatsUnavailableError: a seat already belongs to another non-cancelled booking
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """
        Persist status, payment status and timestamps

        A cancelled booking also releases its seats.
        """
        pass
