"""
Domain errors raised by repositories.

Services translate these into HTTP responses; storage (asyncpg) errors are
not wrapped and propagate as they are.
"""

from __future__ import annotations


class RecordNotFound(LookupError):
    def __init__(self, entity: str, **key: int) -> None:
        self.entity = entity
        self.key = key
        described = ", ".join(f"{k}={v}" for k, v in key.items())
        super().__init__(f"{entity} not found ({described}).")


class BookingAlreadyFinished(RuntimeError):
    def __init__(self, booking_id: int, end: int | None) -> None:
        self.booking_id = booking_id
        self.end = end
        super().__init__(f"Booking {booking_id} is already finished (end={end}).")
