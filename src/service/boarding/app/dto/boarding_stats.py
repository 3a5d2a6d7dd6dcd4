import attrs


@attrs.define(frozen=True)
class BoardingStats:
    trip_id: int
    total: int
    available: int
    held: int
    booked: int
    checked_in: int
    no_show: int
