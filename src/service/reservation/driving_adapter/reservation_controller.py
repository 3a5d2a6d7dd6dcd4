from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.reservation.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.reservation.app.command.claim_seats_use_case import ClaimSeatsUseCase
from src.service.reservation.app.command.confirm_claim_use_case import ConfirmClaimUseCase
from src.service.reservation.app.command.release_claim_use_case import ReleaseClaimUseCase
from src.service.reservation.app.query.get_occupied_seats_use_case import (
    GetOccupiedSeatsUseCase,
)
from src.service.reservation.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.reservation.driving_adapter.schema.seat_schema import (
    BookingResponse,
    ClaimSeatsRequest,
    ConfirmClaimRequest,
    OccupiedSeatsResponse,
    SeatHoldResponse,
    SeatMapResponse,
)
from src.service.shared_kernel.domain.value_object.seat_id import sort_seat_ids


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/trip/{trip_id}/claim', status_code=status.HTTP_201_CREATED)
@Logger.io
async def claim_seats(
    trip_id: int,
    request: ClaimSeatsRequest,
    use_case: ClaimSeatsUseCase = Depends(ClaimSeatsUseCase.depends),
) -> SeatHoldResponse:
    with tracer.start_as_current_span('controller.claim_seats') as span:
        span.set_attribute('trip.id', trip_id)
        span.set_attribute('passenger.id', request.passenger_id)

        hold = await use_case.execute(
            trip_id=trip_id,
            seat_ids=request.seat_ids,
            passenger_id=request.passenger_id,
            passenger_name=request.passenger_name,
            hold_duration_seconds=request.hold_duration_seconds,
        )
        span.set_attribute('claim.token', str(hold.token))
        return SeatHoldResponse.from_domain(hold)


@router.post('/claim/{token}/confirm', status_code=status.HTTP_200_OK)
@Logger.io
async def confirm_claim(
    token: UtilsUUID7,
    request: ConfirmClaimRequest | None = None,
    use_case: ConfirmClaimUseCase = Depends(ConfirmClaimUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        token=token, booking_id=request.booking_id if request else None
    )
    return BookingResponse.from_domain(booking)


@router.delete('/claim/{token}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def release_claim(
    token: UtilsUUID7,
    use_case: ReleaseClaimUseCase = Depends(ReleaseClaimUseCase.depends),
) -> Response:
    await use_case.execute(token=token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch('/booking/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_domain(booking)


@router.get('/trip/{trip_id}/occupied_seats', status_code=status.HTTP_200_OK)
@Logger.io
async def get_occupied_seats(
    trip_id: int,
    use_case: GetOccupiedSeatsUseCase = Depends(GetOccupiedSeatsUseCase.depends),
) -> OccupiedSeatsResponse:
    seat_ids = sort_seat_ids(await use_case.execute(trip_id=trip_id))
    return OccupiedSeatsResponse(trip_id=trip_id, seat_ids=seat_ids, total_count=len(seat_ids))


@router.get('/trip/{trip_id}/seat_map', status_code=status.HTTP_200_OK)
@Logger.io
async def get_seat_map(
    trip_id: int,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    seat_map = await use_case.execute(trip_id=trip_id)
    return SeatMapResponse.from_domain(seat_map)
