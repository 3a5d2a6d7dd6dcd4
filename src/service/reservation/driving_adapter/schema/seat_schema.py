from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.platform.types import UtilsUUID7
from src.service.reservation.domain.seat_hold_entity import SeatHold
from src.service.reservation.domain.seat_map_builder import (
    SeatCell,
    SeatMap,
    SeatOccupant,
    SeatRow,
)
from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.value_object.seat_id import sort_seat_ids


class ClaimSeatsRequest(BaseModel):
    seat_ids: List[str]
    passenger_id: int
    passenger_name: str
    hold_duration_seconds: Optional[int] = None

    class Config:
        json_schema_extra = {
            'example': {
                'seat_ids': ['1A', '1B'],
                'passenger_id': 42,
                'passenger_name': 'Ana Souza',
                'hold_duration_seconds': 600,
            }
        }


class SeatHoldResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'token': '01234567-89ab-7def-0123-456789abcdef',
                'trip_id': 1,
                'seat_ids': ['1A', '1B'],
                'passenger_id': 42,
                'status': 'active',
                'expires_at': '2025-01-10T10:40:00Z',
            }
        }
    )

    token: UtilsUUID7
    trip_id: int
    seat_ids: List[str]
    passenger_id: int
    status: str
    expires_at: datetime

    @classmethod
    def from_domain(cls, hold: SeatHold) -> 'SeatHoldResponse':
        return cls(
            token=hold.token,
            trip_id=hold.trip_id,
            seat_ids=hold.seat_ids,
            passenger_id=hold.passenger_id,
            status=hold.status.value,
            expires_at=hold.expires_at,
        )


class ConfirmClaimRequest(BaseModel):
    """Sent by the payment webhook; ``booking_id`` makes retries safe"""

    booking_id: Optional[UtilsUUID7] = None

    class Config:
        json_schema_extra = {'example': {'booking_id': '01234567-89ab-7def-0123-456789abcdef'}}


class BookingResponse(BaseModel):
    id: UtilsUUID7
    trip_id: int
    passenger_id: int
    passenger_name: str
    seat_ids: List[str]
    booking_reference: str
    status: str
    payment_status: str
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            trip_id=booking.trip_id,
            passenger_id=booking.passenger_id,
            passenger_name=booking.passenger_name,
            seat_ids=booking.seat_ids,
            booking_reference=booking.booking_reference,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            created_at=booking.created_at,
            cancelled_at=booking.cancelled_at,
        )


class OccupiedSeatsResponse(BaseModel):
    trip_id: int
    seat_ids: List[str]
    total_count: int


class SeatOccupantResponse(BaseModel):
    booking_id: str
    booking_reference: str
    passenger_name: str
    check_in_status: str
    check_in_time: Optional[datetime] = None

    @classmethod
    def from_domain(cls, occupant: SeatOccupant) -> 'SeatOccupantResponse':
        return cls(
            booking_id=occupant.booking_id,
            booking_reference=occupant.booking_reference,
            passenger_name=occupant.passenger_name,
            check_in_status=occupant.check_in_status.value,
            check_in_time=occupant.check_in_time,
        )


class SeatCellResponse(BaseModel):
    seat_id: str
    row: int
    letter: str
    status: str
    occupant: Optional[SeatOccupantResponse] = None

    @classmethod
    def from_domain(cls, cell: SeatCell) -> 'SeatCellResponse':
        return cls(
            seat_id=cell.seat_id,
            row=cell.row,
            letter=cell.letter,
            status=cell.status.value,
            occupant=SeatOccupantResponse.from_domain(cell.occupant) if cell.occupant else None,
        )


class SeatRowResponse(BaseModel):
    """Left pair, aisle, right pair; a short last row has an empty right side"""

    row_number: int
    left: List[SeatCellResponse]
    right: List[SeatCellResponse]

    @classmethod
    def from_domain(cls, row: SeatRow) -> 'SeatRowResponse':
        return cls(
            row_number=row.row_number,
            left=[SeatCellResponse.from_domain(cell) for cell in row.left_cells],
            right=[SeatCellResponse.from_domain(cell) for cell in row.right_cells],
        )


class SeatMapInconsistencyResponse(BaseModel):
    seat_id: str
    booking_id: str
    reason: str


class SeatMapResponse(BaseModel):
    trip_id: int
    total_seats: int
    booked_seats: List[str]
    held_seats: List[str]
    seat_details: Dict[str, List[SeatOccupantResponse]] = Field(default_factory=dict)
    grid: List[SeatRowResponse]
    inconsistencies: List[SeatMapInconsistencyResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, seat_map: SeatMap) -> 'SeatMapResponse':
        return cls(
            trip_id=seat_map.trip_id,
            total_seats=seat_map.total_seats,
            booked_seats=sort_seat_ids(seat_map.booked_seats),
            held_seats=sort_seat_ids(seat_map.held_seats),
            seat_details={
                seat_id: [SeatOccupantResponse.from_domain(o) for o in occupants]
                for seat_id, occupants in seat_map.seat_details.items()
            },
            grid=[SeatRowResponse.from_domain(row) for row in seat_map.grid],
            inconsistencies=[
                SeatMapInconsistencyResponse(
                    seat_id=issue.seat_id, booking_id=issue.booking_id, reason=issue.reason
                )
                for issue in seat_map.inconsistencies
            ],
        )
