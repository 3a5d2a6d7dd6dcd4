"""
Typed errors of the seat ledger and boarding flow

Each maps to an HTTP status through the CustomBaseError hierarchy.
"""

from typing import Any, Iterable

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    GoneError,
    NotFoundError,
    ServiceBusyError,
)


# 404
class TripNotFoundError(NotFoundError):
    def __init__(self, trip_id: int) -> None:
        self.trip_id = trip_id
        super().__init__(f'Trip {trip_id} not found')


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: Any) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} not found')


class ClaimNotFoundError(NotFoundError):
    def __init__(self, token: Any) -> None:
        self.token = token
        super().__init__(f'Seat claim {token} not found')


# 400
class InvalidSeatError(DomainError):
    pass


class InvalidCapacityError(DomainError):
    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f'Capacity must be a positive number of seats, got {capacity}')


class TripMismatchError(DomainError):
    def __init__(self, *, booking_id: Any, trip_id: int) -> None:
        super().__init__(f'Booking {booking_id} does not belong to trip {trip_id}')


class InvalidCheckInTransitionError(DomainError):
    pass


# 409
class SeatsUnavailableError(ConflictError):
    def __init__(self, conflicting_seats: Iterable[str]) -> None:
        self.conflicting_seats = list(conflicting_seats)
        super().__init__(f'Seats not available: {", ".join(self.conflicting_seats)}')

    @property
    def context(self) -> dict[str, Any]:
        return {'conflicting_seats': self.conflicting_seats}


class BookingCancelledError(ConflictError):
    def __init__(self, booking_id: Any) -> None:
        super().__init__(f'Booking {booking_id} is cancelled')


class TripFinalizedError(ConflictError):
    def __init__(self, *, trip_id: int, status: str) -> None:
        super().__init__(f'Trip {trip_id} is {status}; boarding records are closed')


class InvalidTripTransitionError(ConflictError):
    def __init__(self, *, trip_id: int, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f'Trip {trip_id} cannot move from {current} to {target}')


class TripClosedForBookingError(ConflictError):
    def __init__(self, *, trip_id: int, status: str) -> None:
        super().__init__(f'Trip {trip_id} is {status} and no longer accepts seat claims')


# 410
class ClaimExpiredError(GoneError):
    def __init__(self, token: Any) -> None:
        self.token = token
        super().__init__(f'Seat claim {token} has expired')


# 503
class TripBusyError(ServiceBusyError):
    def __init__(self, trip_id: int) -> None:
        super().__init__(f'Trip {trip_id} is busy, please retry')
