from prometheus_client import Counter, Gauge, Histogram


class BoxOfficeMetrics:
    """
    Box office business metrics

    Exposed on /metrics. Commit results and verification outcomes are the
    numbers an operator watches during a busy on-sale.
    """

    def __init__(self):
        # ========== Booking Commit Metrics ==========
        self.booking_commits = Counter(
            'box_office_booking_commits_total',
            'Booking commit attempts',
            ['result'],  # committed/conflict/invalid/storage_unavailable
        )

        self.booking_commit_duration = Histogram(
            'box_office_booking_commit_duration_seconds',
            'Booking commit processing time',
            ['result'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        self.availability_conflicts = Counter(
            'box_office_availability_conflicts_total',
            'Seats lost to another booking between read and write',
            ['event_id'],
        )

        self.booked_seats = Counter(
            'box_office_booked_seats_total', 'Seats committed in bookings', ['event_id']
        )

        # ========== Member Verification Metrics ==========
        self.member_verifications = Counter(
            'box_office_member_verifications_total',
            'Membership verification outcomes',
            ['outcome'],  # verified/invalid_code/already_used
        )

        # ========== Live Seat Map Metrics ==========
        self.seat_map_subscribers = Gauge(
            'box_office_seat_map_subscribers', 'Open live seat map streams', ['event_id']
        )

        self.recommendation_failures = Counter(
            'box_office_recommendation_failures_total',
            'Recommendation requests answered with an empty list',
        )

    # ========== Helper Methods ==========

    def record_commit(self, *, result: str, duration: float) -> None:
        self.booking_commits.labels(result=result).inc()
        self.booking_commit_duration.labels(result=result).observe(duration)

    def record_conflict(self, *, event_id: str, seat_count: int) -> None:
        self.availability_conflicts.labels(event_id=event_id).inc(seat_count)

    def record_booked_seats(self, *, event_id: str, seat_count: int) -> None:
        self.booked_seats.labels(event_id=event_id).inc(seat_count)

    def record_verification(self, *, outcome: str) -> None:
        self.member_verifications.labels(outcome=outcome).inc()


# Global metrics instance
metrics = BoxOfficeMetrics()
