from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.shared_kernel.domain.boarding_errors import InvalidCheckInTransitionError
from src.service.shared_kernel.domain.enum.check_in_status import CheckInStatus


# Targets a driver may set; PENDING only means "no record yet"
SETTABLE_CHECK_IN_STATUSES = frozenset({CheckInStatus.CHECKED_IN, CheckInStatus.NO_SHOW})


def ensure_settable(status: CheckInStatus) -> None:
    if status not in SETTABLE_CHECK_IN_STATUSES:
        raise InvalidCheckInTransitionError(
            f'Cannot set check-in status to {status.value}; '
            f'expected one of {sorted(s.value for s in SETTABLE_CHECK_IN_STATUSES)}'
        )


@attrs.define
class CheckInRecord:
    """
    Boarding record of one booking on one trip

    Upserted per (trip_id, booking_id). ``check_in_time`` is stamped on every
    move *into* checked_in and kept otherwise.
    """

    trip_id: int
    booking_id: UUID
    status: CheckInStatus
    check_in_time: Optional[datetime] = None
    notes: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def first(
        cls,
        *,
        trip_id: int,
        booking_id: UUID,
        status: CheckInStatus,
        notes: Optional[str],
        now: datetime,
    ) -> 'CheckInRecord':
        """pending -> checked_in | no_show"""
        ensure_settable(status)
        return cls(
            trip_id=trip_id,
            booking_id=booking_id,
            status=status,
            check_in_time=now if status == CheckInStatus.CHECKED_IN else None,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def apply(
        self, *, status: CheckInStatus, notes: Optional[str], now: datetime
    ) -> 'CheckInRecord':
        """
        checked_in -> checked_in: time kept, notes refreshed
        checked_in -> no_show:    last time kept
        no_show    -> checked_in: new time
        no_show    -> no_show:    notes refreshed
        """
        ensure_settable(status)
        check_in_time = self.check_in_time
        if status == CheckInStatus.CHECKED_IN and self.status != CheckInStatus.CHECKED_IN:
            check_in_time = now

        return attrs.evolve(
            self,
            status=status,
            check_in_time=check_in_time,
            notes=self.notes if notes is None else notes,
            updated_at=now,
        )
