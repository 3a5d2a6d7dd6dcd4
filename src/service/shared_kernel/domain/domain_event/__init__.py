"""Shared Kernel Domain Events"""

from src.service.shared_kernel.domain.domain_event.live_update_event import LiveUpdateEvent
from src.service.shared_kernel.domain.domain_event.mq_domain_event import MqDomainEvent
from src.service.shared_kernel.domain.domain_event.notification_event import (
    BookingConfirmedEvent,
    CheckInChangedEvent,
)

__all__ = ['BookingConfirmedEvent', 'CheckInChangedEvent', 'LiveUpdateEvent', 'MqDomainEvent']
