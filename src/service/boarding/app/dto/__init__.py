"""Boarding DTOs"""

from src.service.boarding.app.dto.boarding_result import BoardingResult
from src.service.boarding.app.dto.boarding_stats import BoardingStats
from src.service.boarding.app.dto.passenger_view import PassengerView

__all__ = ['BoardingResult', 'BoardingStats', 'PassengerView']
