"""Overlap index: which draft or confirmed bookings hold a room's dates."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterator, List, Optional, TypedDict

from django.conf import settings  # type: ignore

from shared.domain.exceptions import Conflict, InvalidInput
from shared.domain.value_objects import DateRange

from .domain.entities import Booking
from .domain.inventory import Allocation
from .repositories import DjangoBookingRepository

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_room_locks: Dict[str, threading.Lock] = {}


class Availability(TypedDict):
    available: bool
    reason: Optional[str]


def _lock_for_room(room_id) -> threading.Lock:
    key = str(room_id)
    with _registry_lock:
        lock = _room_locks.get(key)
        if lock is None:
            lock = _room_locks[key] = threading.Lock()
        return lock


@contextmanager
def room_admission_lock(room_id: int) -> Iterator[None]:
    """Serialize admissions and deletion for one room within this process.

    Held across lookup, overlap check and insert, including the commit.
    Waiting longer than ``BOOKING_ADMISSION_LOCK_TIMEOUT`` seconds raises
    ``Conflict``.
    """

    timeout = float(getattr(settings, "BOOKING_ADMISSION_LOCK_TIMEOUT", 10))
    lock = _lock_for_room(room_id)
    if not lock.acquire(timeout=timeout):
        logger.warning(f"Timed out waiting for the admission lock of room {room_id}")
        raise Conflict("Room is busy with another booking, please retry")
    try:
        yield
    finally:
        lock.release()


def stay_period(check_in: date | None, check_out: date | None) -> DateRange:
    """Build the stay period, rejecting missing or inverted dates."""

    if not check_in or not check_out:
        raise InvalidInput("Please provide check-in and check-out dates")
    try:
        return DateRange(check_in, check_out)
    except ValueError as exc:
        raise InvalidInput(
            "Check-out date must be after check-in date",
            errors={"check_out": [str(exc)]},
        ) from exc


def conflicting_allocations(room_id: int, dates: DateRange) -> List[Allocation]:
    inventory = DjangoBookingRepository().get_inventory(room_id)
    return inventory.get_allocations_for_period(dates)


def has_conflict(room_id: int, check_in: date, check_out: date) -> bool:
    """True if a draft or confirmed booking of the room overlaps the stay.

    Boundaries are inclusive, so a stay starting on another stay's
    check-out day conflicts with it.
    """

    return bool(conflicting_allocations(room_id, stay_period(check_in, check_out)))


def is_room_available(room_id: int, check_in: date, check_out: date) -> bool:
    """Room flag on and no conflicting booking; ``NotFound`` for unknown rooms."""

    room = DjangoBookingRepository().get_room(room_id)
    if not room.is_available:
        return False
    return not has_conflict(room.pk, check_in, check_out)


def check_availability(room_id, check_in: date | None, check_out: date | None) -> Availability:
    """Availability answer with a human readable reason."""

    if not room_id:
        raise InvalidInput("Please provide room, check-in and check-out dates")
    dates = stay_period(check_in, check_out)
    room = DjangoBookingRepository().get_room(room_id)

    if not room.is_available:
        return {"available": False, "reason": "This room is currently not available for booking."}
    if conflicting_allocations(room.pk, dates):
        return {"available": False, "reason": "Room is not available for the selected dates"}
    return {"available": True, "reason": None}


def active_bookings_for_room(room_id: int) -> List[Booking]:
    """Draft and confirmed bookings of the room, oldest stay first."""

    return DjangoBookingRepository().list_active_for_room(room_id)
