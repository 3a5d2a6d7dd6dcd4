"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.boarding.app.command import (
    change_trip_status_use_case,
    confirm_boarding_use_case,
    create_trip_use_case,
    set_check_in_status_use_case,
)
from src.service.boarding.app.query import (
    get_boarding_stats_use_case,
    get_trip_use_case,
    list_trip_passengers_use_case,
    stream_trip_live_updates_use_case,
)
from src.service.reservation.app.command import (
    cancel_booking_use_case,
    claim_seats_use_case,
    confirm_claim_use_case,
    release_claim_use_case,
)
from src.service.reservation.app.query import (
    get_occupied_seats_use_case,
    get_seat_map_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    claim_seats_use_case,
    confirm_claim_use_case,
    release_claim_use_case,
    cancel_booking_use_case,
    get_occupied_seats_use_case,
    get_seat_map_use_case,
    create_trip_use_case,
    change_trip_status_use_case,
    set_check_in_status_use_case,
    confirm_boarding_use_case,
    get_trip_use_case,
    list_trip_passengers_use_case,
    get_boarding_stats_use_case,
    stream_trip_live_updates_use_case,
]
