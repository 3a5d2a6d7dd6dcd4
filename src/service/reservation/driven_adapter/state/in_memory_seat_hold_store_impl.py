"""
In-memory Seat Hold Store

Single-process store: one dict by token plus a per-trip token index.
Callers serialize writes per trip; reads never await, so they see a
consistent snapshot.
"""

from datetime import datetime
from typing import Dict, List, Optional, Set

from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_seat_hold_store import ISeatHoldStore
from src.service.reservation.domain.seat_hold_entity import HoldStatus, SeatHold


class InMemorySeatHoldStoreImpl(ISeatHoldStore):
    def __init__(self) -> None:
        self._holds: Dict[str, SeatHold] = {}
        self._tokens_by_trip: Dict[int, Set[str]] = {}

    async def add(self, *, hold: SeatHold) -> None:
        key = str(hold.token)
        self._holds[key] = hold
        self._tokens_by_trip.setdefault(hold.trip_id, set()).add(key)

    async def get(self, *, token: UUID) -> Optional[SeatHold]:
        return self._holds.get(str(token))

    async def save(self, *, hold: SeatHold) -> None:
        key = str(hold.token)
        if key not in self._holds:
            raise KeyError(f'Unknown seat hold {key}')
        self._holds[key] = hold

    async def active_holds(self, *, trip_id: int, now: datetime) -> List[SeatHold]:
        holds = [self._holds[key] for key in self._tokens_by_trip.get(trip_id, ())]
        return sorted(
            (hold for hold in holds if hold.is_active(now)),
            key=lambda hold: hold.created_at,
        )

    async def held_seat_ids(self, *, trip_id: int, now: datetime) -> Set[str]:
        seat_ids: Set[str] = set()
        for hold in await self.active_holds(trip_id=trip_id, now=now):
            seat_ids.update(hold.seat_ids)
        return seat_ids

    async def lapsed_holds(self, *, now: datetime) -> List[SeatHold]:
        return [hold for hold in self._holds.values() if hold.is_lapsed(now)]

    async def purge_finished(self, *, finished_before: datetime) -> int:
        stale = [
            key
            for key, hold in self._holds.items()
            if hold.status != HoldStatus.ACTIVE
            and hold.finished_at is not None
            and hold.finished_at < finished_before
        ]
        for key in stale:
            hold = self._holds.pop(key)
            tokens = self._tokens_by_trip.get(hold.trip_id)
            if tokens is not None:
                tokens.discard(key)
                if not tokens:
                    del self._tokens_by_trip[hold.trip_id]

        if stale:
            Logger.base.debug(f'🧹 [HOLD-STORE] Purged {len(stale)} finished holds')
        return len(stale)

    def __len__(self) -> int:
        return len(self._holds)
