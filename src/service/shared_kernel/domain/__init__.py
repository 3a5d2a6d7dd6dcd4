"""Shared Kernel Domain Layer"""

from src.service.shared_kernel.domain.domain_event import MqDomainEvent
from src.service.shared_kernel.domain.value_object import SeatId

__all__ = ['MqDomainEvent', 'SeatId']
