"""
Booking Domain Events

Published after the transaction that produced them commits. They carry
everything a guest notification needs so that subscribers do not read
the database again.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingEvent(DomainEvent):
    booking_id: UUID
    booking_code: str
    room_id: int | None
    room_name: str
    guest_name: str
    guest_email: str
    check_in: date
    check_out: date


@dataclass(kw_only=True)
class BookingCreated(BookingEvent):
    """
    Event: A booking was admitted in draft

    Triggers:
    - Send the draft confirmation email to the guest contact address
    """
    booking_type: str
    total_amount: Decimal
    discount_applied: Decimal
    final_amount: Decimal
    currency: str
    account_id: UUID | None


@dataclass(kw_only=True)
class BookingStatusChanged(BookingEvent):
    """
    Event: An admin moved a booking to a new status

    Triggers:
    - Send the status update email to the guest
    """
    old_status: str
    new_status: str
    final_amount: Decimal
    currency: str


@dataclass(kw_only=True)
class BookingCancelled(BookingEvent):
    """
    Event: Owner or admin cancelled a booking

    Triggers:
    - Send the cancellation email to the guest
    """
    old_status: str
    cancelled_by: UUID | None
