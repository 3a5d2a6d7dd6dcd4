from prometheus_client import Counter, Gauge


class BoardingMetrics:
    """
    Core counters for the seat ledger and boarding flow

    Scraped from /metrics by Prometheus.
    """

    def __init__(self):
        self.seat_claims = Counter(
            'seat_claims_total',
            'Seat claim attempts',
            ['result'],  # result: claimed/conflict/rejected
        )

        self.claims_confirmed = Counter(
            'seat_claims_confirmed_total',
            'Claims converted into bookings',
            ['replayed'],
        )

        self.holds_expired = Counter(
            'seat_holds_expired_total',
            'Seat holds released by the expiry sweeper',
        )

        self.bookings_cancelled = Counter(
            'bookings_cancelled_total',
            'Bookings cancelled and seats freed',
        )

        self.check_ins = Counter(
            'check_in_transitions_total',
            'Check-in status changes applied by drivers',
            ['status'],
        )

        self.live_events_dropped = Counter(
            'live_update_events_dropped_total',
            'Live update events dropped for slow or disconnected viewers',
        )

        self.live_viewers = Gauge(
            'live_update_viewers',
            'Currently connected live update viewers',
        )


metrics = BoardingMetrics()
