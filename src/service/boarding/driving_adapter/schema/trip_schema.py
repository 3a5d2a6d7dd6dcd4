from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.service.boarding.app.dto.boarding_stats import BoardingStats
from src.service.boarding.app.dto.passenger_view import PassengerView
from src.service.boarding.domain.trip_entity import Trip


class TripCreateRequest(BaseModel):
    route_ref: str
    bus_plate: str
    capacity: int
    departure_at: datetime
    arrival_at: Optional[datetime] = None
    company_id: Optional[int] = None

    class Config:
        json_schema_extra = {
            'example': {
                'route_ref': 'SAO-RIO-0730',
                'bus_plate': 'ABC1D23',
                'capacity': 50,
                'departure_at': '2025-01-10T07:30:00Z',
                'arrival_at': '2025-01-10T13:45:00Z',
                'company_id': 1,
            }
        }


class TripResponse(BaseModel):
    id: int
    route_ref: str
    bus_plate: str
    capacity: int
    status: str
    departure_at: datetime
    arrival_at: Optional[datetime] = None
    company_id: Optional[int] = None
    actual_departure_at: Optional[datetime] = None
    actual_arrival_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, trip: Trip) -> 'TripResponse':
        return cls(
            id=trip.trip_id,
            route_ref=trip.route_ref,
            bus_plate=trip.bus_plate,
            capacity=trip.capacity,
            status=trip.status.value,
            departure_at=trip.departure_at,
            arrival_at=trip.arrival_at,
            company_id=trip.company_id,
            actual_departure_at=trip.actual_departure_at,
            actual_arrival_at=trip.actual_arrival_at,
        )


class PassengerResponse(BaseModel):
    booking_id: str
    booking_reference: str
    passenger_id: int
    passenger_name: str
    seat_ids: List[str]
    booking_status: str
    check_in_status: str
    check_in_time: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, view: PassengerView) -> 'PassengerResponse':
        return cls(
            booking_id=view.booking_id,
            booking_reference=view.booking_reference,
            passenger_id=view.passenger_id,
            passenger_name=view.passenger_name,
            seat_ids=view.seat_ids,
            booking_status=view.booking_status.value,
            check_in_status=view.check_in_status.value,
            check_in_time=view.check_in_time,
            notes=view.notes,
        )


class BoardingStatsResponse(BaseModel):
    trip_id: int
    total: int
    available: int
    held: int
    booked: int
    checked_in: int
    no_show: int

    @classmethod
    def from_domain(cls, stats: BoardingStats) -> 'BoardingStatsResponse':
        return cls(
            trip_id=stats.trip_id,
            total=stats.total,
            available=stats.available,
            held=stats.held,
            booked=stats.booked,
            checked_in=stats.checked_in,
            no_show=stats.no_show,
        )
