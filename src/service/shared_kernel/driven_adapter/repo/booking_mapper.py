from uuid_utils import UUID

from src.service.shared_kernel.domain.entity.booking_entity import Booking
from src.service.shared_kernel.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.shared_kernel.driven_adapter.model.booking_model import BookingModel


def booking_model_to_entity(model: BookingModel) -> Booking:
    return Booking(
        id=UUID(model.id),
        trip_id=model.trip_id,
        passenger_id=model.passenger_id,
        passenger_name=model.passenger_name,
        seat_ids=list(model.seat_ids),
        booking_reference=model.booking_reference,
        status=BookingStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        claim_token=UUID(model.claim_token) if model.claim_token else None,
        created_at=model.created_at,
        updated_at=model.updated_at,
        cancelled_at=model.cancelled_at,
    )
