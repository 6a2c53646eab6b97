"""
Booking business logic.

Translates repository outcomes into HTTP semantics:
- RecordNotFound -> 404
- BookingAlreadyFinished -> 409
- update with no fields -> None (route answers 204)
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core import db
from core.errors import BookingAlreadyFinished, RecordNotFound

from . import repository
from .schemas import BookingCreate, BookingFilter, BookingUpdate


def _not_found(exc: RecordNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


async def list_bookings(executor: db.Executor, filters: BookingFilter) -> list[dict[str, Any]]:
    return await repository.list_bookings(executor, filters)


async def get_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    try:
        return await repository.get_booking(executor, booking_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc


async def create_booking(executor: db.Executor, payload: BookingCreate) -> dict[str, Any]:
    return await repository.create_booking(executor, payload)


async def update_booking(
    executor: db.Executor,
    booking_id: int,
    payload: BookingUpdate,
) -> dict[str, Any] | None:
    try:
        return await repository.update_booking(executor, booking_id, payload)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc


async def finish_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    try:
        return await repository.finish_booking(executor, booking_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    except BookingAlreadyFinished as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


async def delete_booking(executor: db.Executor, booking_id: int) -> dict[str, Any]:
    try:
        return await repository.delete_booking(executor, booking_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
