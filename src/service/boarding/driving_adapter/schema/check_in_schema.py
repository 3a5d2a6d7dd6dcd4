from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.boarding.app.dto.boarding_result import BoardingResult
from src.service.boarding.domain.check_in_entity import CheckInRecord
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


class CheckInRequest(BaseModel):
    # ``pending`` parses; the domain refuses it
    status: CheckInStatus
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'status': 'checked_in', 'notes': 'Large suitcase'}}


class CheckInResponse(BaseModel):
    trip_id: int
    booking_id: str
    status: str
    check_in_time: Optional[datetime] = None
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: CheckInRecord) -> 'CheckInResponse':
        return cls(
            trip_id=record.trip_id,
            booking_id=str(record.booking_id),
            status=record.status.value,
            check_in_time=record.check_in_time,
            notes=record.notes,
            updated_at=record.updated_at,
        )


class BoardingScanRequest(BaseModel):
    """Code read from the ticket: booking reference or booking id"""

    ticket_id: str

    class Config:
        json_schema_extra = {'example': {'ticket_id': 'BK7Q2M9XA4'}}


class BoardingScanResponse(BaseModel):
    booking_id: str
    booking_reference: str
    passenger_name: str
    seat_ids: list[str]
    check_in: CheckInResponse

    @classmethod
    def from_domain(cls, result: BoardingResult) -> 'BoardingScanResponse':
        return cls(
            booking_id=str(result.booking.id),
            booking_reference=result.booking.booking_reference,
            passenger_name=result.booking.passenger_name,
            seat_ids=result.booking.seat_ids,
            check_in=CheckInResponse.from_domain(result.check_in),
        )
