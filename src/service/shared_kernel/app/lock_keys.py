"""Keys of the in-process critical sections"""


def trip_lock_key(trip_id: int) -> str:
    """Seat ledger writes, check-ins and trip status changes of one trip"""
    return f'trip:{trip_id}'
