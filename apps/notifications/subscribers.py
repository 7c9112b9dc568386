"""Domain event subscribers that queue guest emails.

They run after the booking transaction committed. Queueing problems are
logged and swallowed: the booking operation has already succeeded.
"""

from __future__ import annotations

import logging

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCreated,
    BookingStatusChanged,
)
from shared.application.message_bus import MessageBus

from .services import (
    EmailMessage,
    booking_cancelled_message,
    booking_created_message,
    status_changed_message,
)
from .tasks import deliver_email

logger = logging.getLogger(__name__)


def _enqueue(message: EmailMessage) -> None:
    try:
        deliver_email.delay(message.recipient, message.subject, message.body)
    except Exception as e:
        logger.error(f"Could not queue email to {message.recipient}: {e}", exc_info=True)


def on_booking_created(event: BookingCreated) -> None:
    _enqueue(booking_created_message(event))


def on_booking_status_changed(event: BookingStatusChanged) -> None:
    _enqueue(status_changed_message(event))


def on_booking_cancelled(event: BookingCancelled) -> None:
    _enqueue(booking_cancelled_message(event))


def register(bus: MessageBus) -> None:
    bus.register_event_handler(BookingCreated, on_booking_created)
    bus.register_event_handler(BookingStatusChanged, on_booking_status_changed)
    bus.register_event_handler(BookingCancelled, on_booking_cancelled)
