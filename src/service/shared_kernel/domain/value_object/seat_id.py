"""
Seat Id Value Object

A seat is identified by ``{row}{letter}``: rows start at 1, letters A-D
(A,B left of the aisle; C,D right). Seat ``index = (row - 1) * 4 + letter``
and is valid for a bus of ``capacity`` seats when ``index < capacity``.
"""

import math
import re
from typing import Iterable, List

import attrs

from src.service.shared_kernel.domain.boarding_errors import InvalidSeatError


SEAT_LETTERS = ('A', 'B', 'C', 'D')
SEATS_PER_ROW = len(SEAT_LETTERS)

_SEAT_ID_PATTERN = re.compile(r'^([1-9][0-9]*)([A-D])$')


@attrs.define(frozen=True, order=True)
class SeatId:
    """Seat Id (Value Object); ordering follows the grid"""

    row: int
    letter: str = attrs.field(order=SEAT_LETTERS.index)

    def __str__(self) -> str:
        return f'{self.row}{self.letter}'

    @property
    def index(self) -> int:
        return (self.row - 1) * SEATS_PER_ROW + SEAT_LETTERS.index(self.letter)

    def fits(self, capacity: int) -> bool:
        return self.index < capacity

    @classmethod
    def parse(cls, raw: str) -> 'SeatId':
        """Normalize and parse, e.g. ``' 3b '`` -> ``3B``"""
        if not isinstance(raw, str):
            raise InvalidSeatError(f'Seat id must be a string, got {raw!r}')
        match = _SEAT_ID_PATTERN.match(raw.strip().upper())
        if not match:
            raise InvalidSeatError(f'Invalid seat id {raw!r}. Expected row + A-D, e.g. 1A, 12C')
        return cls(row=int(match.group(1)), letter=match.group(2))

    @classmethod
    def parse_for_capacity(cls, raw: str, *, capacity: int) -> 'SeatId':
        seat = cls.parse(raw)
        if not seat.fits(capacity):
            raise InvalidSeatError(f'Seat {seat} does not exist on a {capacity}-seat bus')
        return seat


def row_count(capacity: int) -> int:
    return math.ceil(capacity / SEATS_PER_ROW)


def all_seat_ids(capacity: int) -> List[str]:
    """Every seat id of a bus in grid order"""
    return [
        f'{index // SEATS_PER_ROW + 1}{SEAT_LETTERS[index % SEATS_PER_ROW]}'
        for index in range(max(capacity, 0))
    ]


def seat_sort_key(seat_id: str) -> tuple:
    """Grid order for well-formed ids; anything malformed sorts last as-is"""
    try:
        return (0, SeatId.parse(seat_id).index, '')
    except InvalidSeatError:
        return (1, 0, seat_id)


def sort_seat_ids(seat_ids: Iterable[str]) -> List[str]:
    return sorted(seat_ids, key=seat_sort_key)
