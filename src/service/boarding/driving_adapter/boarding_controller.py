from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.boarding.app.command.confirm_boarding_use_case import ConfirmBoardingUseCase
from src.service.boarding.app.command.set_check_in_status_use_case import (
    SetCheckInStatusUseCase,
)
from src.service.boarding.driving_adapter.schema.check_in_schema import (
    BoardingScanRequest,
    BoardingScanResponse,
    CheckInRequest,
    CheckInResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.put('/trip/{trip_id}/booking/{booking_id}/check_in', status_code=status.HTTP_200_OK)
@Logger.io
async def set_check_in_status(
    trip_id: int,
    booking_id: UtilsUUID7,
    request: CheckInRequest,
    use_case: SetCheckInStatusUseCase = Depends(SetCheckInStatusUseCase.depends),
) -> CheckInResponse:
    record = await use_case.execute(
        trip_id=trip_id, booking_id=booking_id, status=request.status, notes=request.notes
    )
    return CheckInResponse.from_domain(record)


@router.post('/trip/{trip_id}/boarding', status_code=status.HTTP_200_OK)
@Logger.io
async def confirm_boarding(
    trip_id: int,
    request: BoardingScanRequest,
    use_case: ConfirmBoardingUseCase = Depends(ConfirmBoardingUseCase.depends),
) -> BoardingScanResponse:
    with tracer.start_as_current_span('controller.confirm_boarding') as span:
        span.set_attribute('trip.id', trip_id)

        result = await use_case.execute(trip_id=trip_id, ticket_id=request.ticket_id)
        span.set_attribute('booking.id', str(result.booking.id))
        return BoardingScanResponse.from_domain(result)
