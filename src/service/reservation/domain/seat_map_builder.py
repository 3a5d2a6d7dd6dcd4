"""
Seat Map Builder

Pure functions from a bus capacity, the trip's bookings and their check-in
records to the seat grid drawn on the driver's screen.

Layout: rows of four seats, ``A B | aisle | C D``; the last row may be
partial. Cell status comes from the non-cancelled booking on the seat and its
check-in record, which wins over the status mirrored on the booking.

Bad data never stops the grid from rendering: a seat outside the bus, a
malformed seat id, or a seat held by two live bookings becomes a
``SeatMapInconsistency`` (logged and returned with the view).
"""

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.boarding.domain.check_in_entity import CheckInRecord
from src.service.shared_kernel.domain.boarding_errors import InvalidCapacityError, InvalidSeatError
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.value_object.seat_id import (
    SEAT_LETTERS,
    SeatId,
    all_seat_ids,
    row_count,
)


LEFT_LETTERS = SEAT_LETTERS[:2]
RIGHT_LETTERS = SEAT_LETTERS[2:]

_CHECK_IN_TO_SEAT_STATUS = {
    CheckInStatus.PENDING: SeatStatus.BOOKED,
    CheckInStatus.CHECKED_IN: SeatStatus.CHECKED_IN,
    CheckInStatus.NO_SHOW: SeatStatus.NO_SHOW,
}


@attrs.define(frozen=True)
class SeatOccupant:
    booking_id: str
    booking_reference: str
    passenger_name: str
    check_in_status: CheckInStatus
    check_in_time: Optional[datetime] = None


@attrs.define(frozen=True)
class SeatCell:
    seat_id: str
    row: int
    letter: str
    status: SeatStatus = SeatStatus.AVAILABLE
    occupant: Optional[SeatOccupant] = None


@attrs.define(frozen=True)
class SeatRow:
    row_number: int
    cells: Tuple[SeatCell, ...]

    @property
    def left_cells(self) -> Tuple[SeatCell, ...]:
        return tuple(cell for cell in self.cells if cell.letter in LEFT_LETTERS)

    @property
    def right_cells(self) -> Tuple[SeatCell, ...]:
        return tuple(cell for cell in self.cells if cell.letter in RIGHT_LETTERS)


@attrs.define(frozen=True)
class SeatMapInconsistency:
    seat_id: str
    booking_id: str
    reason: str


@attrs.define(frozen=True)
class SeatMap:
    trip_id: int
    total_seats: int
    booked_seats: frozenset
    held_seats: frozenset
    seat_details: Mapping[str, Tuple[SeatOccupant, ...]]
    grid: Tuple[SeatRow, ...]
    inconsistencies: Tuple[SeatMapInconsistency, ...] = ()

    def count(self, status: SeatStatus) -> int:
        return sum(1 for row in self.grid for cell in row.cells if cell.status == status)


@attrs.define(frozen=True)
class _Layout:
    occupants: Dict[str, List[SeatOccupant]]
    inconsistencies: List[SeatMapInconsistency]


def _check_in_index(check_ins: Optional[Iterable[CheckInRecord]]) -> Dict[str, CheckInRecord]:
    return {str(record.booking_id): record for record in check_ins or ()}


def _occupant_for(booking: Booking, record: Optional[CheckInRecord]) -> SeatOccupant:
    if record is not None:
        status, check_in_time = record.status, record.check_in_time
    else:
        status, check_in_time = booking.check_in_status, None
    return SeatOccupant(
        booking_id=str(booking.id),
        booking_reference=booking.booking_reference,
        passenger_name=booking.passenger_name,
        check_in_status=status,
        check_in_time=check_in_time,
    )


def _lay_out_bookings(
    *,
    capacity: int,
    bookings: Iterable[Booking],
    check_ins: Optional[Iterable[CheckInRecord]],
) -> _Layout:
    records = _check_in_index(check_ins)
    occupants: Dict[str, List[SeatOccupant]] = {}
    inconsistencies: List[SeatMapInconsistency] = []

    for booking in bookings:
        if not booking.is_active:
            continue
        occupant = _occupant_for(booking, records.get(str(booking.id)))

        for raw_seat_id in booking.seat_ids:
            try:
                seat_id = str(SeatId.parse_for_capacity(raw_seat_id, capacity=capacity))
            except InvalidSeatError as e:
                inconsistencies.append(
                    SeatMapInconsistency(
                        seat_id=str(raw_seat_id), booking_id=occupant.booking_id, reason=e.message
                    )
                )
                continue

            if seat_id in occupants:
                inconsistencies.append(
                    SeatMapInconsistency(
                        seat_id=seat_id,
                        booking_id=occupant.booking_id,
                        reason=(
                            f'Seat {seat_id} is also booked by '
                            f'{occupants[seat_id][0].booking_reference}'
                        ),
                    )
                )
            occupants.setdefault(seat_id, []).append(occupant)

    for issue in inconsistencies:
        Logger.base.warning(
            f'⚠️ [SEAT-MAP] Inconsistent booking {issue.booking_id} on seat {issue.seat_id}: '
            f'{issue.reason}'
        )
    return _Layout(occupants=occupants, inconsistencies=inconsistencies)


def _build_grid(
    *,
    capacity: int,
    occupants: Mapping[str, List[SeatOccupant]],
    held_seats: frozenset,
) -> Tuple[SeatRow, ...]:
    rows: List[List[SeatCell]] = [[] for _ in range(row_count(capacity))]

    for seat_id in all_seat_ids(capacity):
        seat = SeatId.parse(seat_id)
        seat_occupants = occupants.get(seat_id)
        if seat_occupants:
            # The first booking on a doubly-booked seat owns the cell
            occupant = seat_occupants[0]
            cell = SeatCell(
                seat_id=seat_id,
                row=seat.row,
                letter=seat.letter,
                status=_CHECK_IN_TO_SEAT_STATUS[occupant.check_in_status],
                occupant=occupant,
            )
        elif seat_id in held_seats:
            cell = SeatCell(seat_id=seat_id, row=seat.row, letter=seat.letter, status=SeatStatus.HELD)
        else:
            cell = SeatCell(seat_id=seat_id, row=seat.row, letter=seat.letter)
        rows[seat.row - 1].append(cell)

    return tuple(SeatRow(row_number=i + 1, cells=tuple(cells)) for i, cells in enumerate(rows))


def build_seat_grid(
    *,
    capacity: int,
    bookings: Iterable[Booking],
    check_ins: Optional[Iterable[CheckInRecord]] = None,
) -> Tuple[SeatRow, ...]:
    """
    Example (capacity=6, booking on 1A):
        row 1: 1A booked, 1B, 1C, 1D available
        row 2: 2A, 2B available
    """
    if capacity <= 0:
        raise InvalidCapacityError(capacity)
    layout = _lay_out_bookings(capacity=capacity, bookings=bookings, check_ins=check_ins)
    return _build_grid(capacity=capacity, occupants=layout.occupants, held_seats=frozenset())


def build_seat_map(
    *,
    trip_id: int,
    capacity: int,
    bookings: Iterable[Booking],
    check_ins: Optional[Iterable[CheckInRecord]] = None,
    held_seats: Iterable[str] = (),
) -> SeatMap:
    if capacity <= 0:
        raise InvalidCapacityError(capacity)

    layout = _lay_out_bookings(capacity=capacity, bookings=bookings, check_ins=check_ins)
    booked = frozenset(layout.occupants)
    held = frozenset(held_seats) - booked

    return SeatMap(
        trip_id=trip_id,
        total_seats=capacity,
        booked_seats=booked,
        held_seats=held,
        seat_details={seat_id: tuple(items) for seat_id, items in layout.occupants.items()},
        grid=_build_grid(capacity=capacity, occupants=layout.occupants, held_seats=held),
        inconsistencies=tuple(layout.inconsistencies),
    )
