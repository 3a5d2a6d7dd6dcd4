"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.shared_kernel.driven_adapter.model.booking_model import BookingModel
from src.service.shared_kernel.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.shared_kernel.driven_adapter.model.check_in_model import CheckInModel
from src.service.shared_kernel.driven_adapter.model.trip_model import TripModel

__all__ = [
    'BookingModel',
    'BookingSeatModel',
    'CheckInModel',
    'TripModel',
]
