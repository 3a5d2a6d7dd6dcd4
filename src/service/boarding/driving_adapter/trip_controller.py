from collections.abc import AsyncGenerator
from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.logging.loguru_io import Logger
from src.service.boarding.app.command.change_trip_status_use_case import ChangeTripStatusUseCase
from src.service.boarding.app.command.create_trip_use_case import CreateTripUseCase
from src.service.boarding.app.query.get_boarding_stats_use_case import GetBoardingStatsUseCase
from src.service.boarding.app.query.get_trip_use_case import GetTripUseCase
from src.service.boarding.app.query.list_trip_passengers_use_case import (
    ListTripPassengersUseCase,
)
from src.service.boarding.app.query.stream_trip_live_updates_use_case import (
    StreamTripLiveUpdatesUseCase,
)
from src.service.boarding.driving_adapter.schema.trip_schema import (
    BoardingStatsResponse,
    PassengerResponse,
    TripCreateRequest,
    TripResponse,
)
from src.service.reservation.driving_adapter.schema.seat_schema import SeatMapResponse
from src.service.shared_kernel.domain.enum.live_event_type import LiveEventType


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/trip', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_trip(
    request: TripCreateRequest,
    use_case: CreateTripUseCase = Depends(CreateTripUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(
        route_ref=request.route_ref,
        bus_plate=request.bus_plate,
        capacity=request.capacity,
        departure_at=request.departure_at,
        arrival_at=request.arrival_at,
        company_id=request.company_id,
    )
    return TripResponse.from_domain(trip)


@router.get('/trip/{trip_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_trip(
    trip_id: int,
    use_case: GetTripUseCase = Depends(GetTripUseCase.depends),
) -> TripResponse:
    trip = await use_case.execute(trip_id=trip_id)
    return TripResponse.from_domain(trip)


# ============================ Trip Lifecycle ============================


@router.post('/trip/{trip_id}/start_boarding', status_code=status.HTTP_200_OK)
@Logger.io
async def start_boarding(
    trip_id: int,
    use_case: ChangeTripStatusUseCase = Depends(ChangeTripStatusUseCase.depends),
) -> TripResponse:
    trip = await use_case.start_boarding(trip_id=trip_id)
    return TripResponse.from_domain(trip)


@router.post('/trip/{trip_id}/depart', status_code=status.HTTP_200_OK)
@Logger.io
async def depart_trip(
    trip_id: int,
    use_case: ChangeTripStatusUseCase = Depends(ChangeTripStatusUseCase.depends),
) -> TripResponse:
    trip = await use_case.depart(trip_id=trip_id)
    return TripResponse.from_domain(trip)


@router.post('/trip/{trip_id}/arrive', status_code=status.HTTP_200_OK)
@Logger.io
async def arrive_trip(
    trip_id: int,
    use_case: ChangeTripStatusUseCase = Depends(ChangeTripStatusUseCase.depends),
) -> TripResponse:
    trip = await use_case.arrive(trip_id=trip_id)
    return TripResponse.from_domain(trip)


@router.post('/trip/{trip_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_trip(
    trip_id: int,
    use_case: ChangeTripStatusUseCase = Depends(ChangeTripStatusUseCase.depends),
) -> TripResponse:
    trip = await use_case.cancel(trip_id=trip_id)
    return TripResponse.from_domain(trip)


# ============================ Driver Dashboard ============================


@router.get('/trip/{trip_id}/passengers', status_code=status.HTTP_200_OK)
@Logger.io
async def list_trip_passengers(
    trip_id: int,
    use_case: ListTripPassengersUseCase = Depends(ListTripPassengersUseCase.depends),
) -> List[PassengerResponse]:
    passengers = await use_case.execute(trip_id=trip_id)
    return [PassengerResponse.from_domain(view) for view in passengers]


@router.get('/trip/{trip_id}/boarding_stats', status_code=status.HTTP_200_OK)
@Logger.io
async def get_boarding_stats(
    trip_id: int,
    use_case: GetBoardingStatsUseCase = Depends(GetBoardingStatsUseCase.depends),
) -> BoardingStatsResponse:
    stats = await use_case.execute(trip_id=trip_id)
    return BoardingStatsResponse.from_domain(stats)


# ============================ SSE Endpoint ============================


@router.get('/trip/{trip_id}/live', status_code=status.HTTP_200_OK)
@Logger.io
async def stream_trip_live_updates(
    trip_id: int,
    use_case: StreamTripLiveUpdatesUseCase = Depends(StreamTripLiveUpdatesUseCase.depends),
) -> EventSourceResponse:
    """
    SSE seat map of a trip

    1. ``initial_seat_map`` with the full grid
    2. seat_claimed / seat_released / seat_booked / check_in_changed /
       trip_status_changed as they happen
    """
    # Unknown trip fails here with 404, before the stream starts
    seat_map, subscription = await use_case.open(trip_id=trip_id)
    Logger.base.info(f'📡 [SSE] Viewer subscribed to trip {trip_id}')

    async def event_generator() -> AsyncGenerator[dict, None]:
        async for data in use_case.stream(
            trip_id=trip_id, seat_map=seat_map, subscription=subscription
        ):
            if data['event_type'] == LiveEventType.INITIAL_SEAT_MAP:
                payload = SeatMapResponse.from_domain(data['seat_map']).model_dump(mode='json')
                yield {
                    'event': LiveEventType.INITIAL_SEAT_MAP.value,
                    'data': orjson.dumps(payload).decode(),
                }
            else:
                yield {'event': data['event_type'], 'data': orjson.dumps(data).decode()}

    return EventSourceResponse(event_generator())
