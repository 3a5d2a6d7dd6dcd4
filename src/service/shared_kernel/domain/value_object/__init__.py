"""Shared Kernel Value Objects"""

from src.service.shared_kernel.domain.value_object.seat_id import (
    SEAT_LETTERS,
    SEATS_PER_ROW,
    SeatId,
    all_seat_ids,
    row_count,
    seat_sort_key,
    sort_seat_ids,
)

__all__ = [
    'SEAT_LETTERS',
    'SEATS_PER_ROW',
    'SeatId',
    'all_seat_ids',
    'row_count',
    'seat_sort_key',
    'sort_seat_ids',
]
