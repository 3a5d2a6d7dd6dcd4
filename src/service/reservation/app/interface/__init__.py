"""Reservation Service Interfaces"""

from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore

__all__ = ['ISeatHoldStore']
