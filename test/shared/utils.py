from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from test.route_constant import CLAIM_CONFIRM, TRIP_BASE, TRIP_CLAIM


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, *, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


def default_trip_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        'route_ref': 'SAO-RIO-0730',
        'bus_plate': 'abc1d23',
        'capacity': 50,
        'departure_at': datetime(2025, 1, 10, 7, 30, tzinfo=timezone.utc).isoformat(),
        'arrival_at': datetime(2025, 1, 10, 13, 45, tzinfo=timezone.utc).isoformat(),
        'company_id': 1,
    }
    payload.update(overrides)
    return payload


def create_trip(client: TestClient, **overrides: Any) -> Dict[str, Any]:
    response = client.post(TRIP_BASE, json=default_trip_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def claim_seats(
    client: TestClient,
    *,
    trip_id: int,
    seat_ids: List[str],
    passenger_id: int = 7,
    passenger_name: str = 'Ana Souza',
    hold_duration_seconds: Optional[int] = None,
) -> Any:
    body: Dict[str, Any] = {
        'seat_ids': seat_ids,
        'passenger_id': passenger_id,
        'passenger_name': passenger_name,
    }
    if hold_duration_seconds is not None:
        body['hold_duration_seconds'] = hold_duration_seconds
    return client.post(TRIP_CLAIM.format(trip_id=trip_id), json=body)


def book_seats(client: TestClient, *, trip_id: int, seat_ids: List[str], **kwargs: Any) -> Dict[str, Any]:
    """Claim + confirm in one go; returns the booking body"""
    claim = claim_seats(client, trip_id=trip_id, seat_ids=seat_ids, **kwargs)
    assert claim.status_code == 201, claim.text
    confirm = client.post(CLAIM_CONFIRM.format(token=claim.json()['token']), json={})
    assert confirm.status_code == 200, confirm.text
    return confirm.json()
