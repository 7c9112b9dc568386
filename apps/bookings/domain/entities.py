"""
Booking Domain Entities

- Booking: aggregate representing a reservation of one room
- BookingStatus: lifecycle states and the legal transitions between them
- GuestDetails / GuestReference: who the booking belongs to and how to reach them
"""

import secrets
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union
from uuid import UUID

from django.utils import timezone

from shared.domain.base import Aggregate, ValueObject
from shared.domain.exceptions import Conflict
from shared.domain.value_objects import DateRange, Money

from apps.bookings.domain.pricing import BookingType, PriceQuote


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - DRAFT -> CONFIRMED (admin approved)
    - DRAFT -> CANCELLED (admin or owning guest)
    - CONFIRMED -> COMPLETED (admin, stay finished)
    - CONFIRMED -> CANCELLED (admin or owning guest)

    CANCELLED and COMPLETED are terminal.
    """
    DRAFT = 'draft'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def can_transition_to(self, new_status: 'BookingStatus') -> bool:
        return new_status in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS = {
    BookingStatus.DRAFT: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

TERMINAL_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})

# Statuses whose bookings hold their dates
BLOCKING_STATUSES = frozenset({BookingStatus.DRAFT, BookingStatus.CONFIRMED})


class PaymentStatus(Enum):
    """Recorded for information, settlement happens elsewhere"""
    PENDING = 'pending'
    PAID = 'paid'


@dataclass(frozen=True)
class GuestDetails(ValueObject):
    """Contact details captured with the booking"""
    name: str
    email: str
    phone: str
    address: str = ''
    id_proof: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'id_proof': self.id_proof,
        }


@dataclass(frozen=True)
class RegisteredAccount(ValueObject):
    """Booking belongs to an account"""
    account_id: UUID


@dataclass(frozen=True)
class AdHocContact(ValueObject):
    """Booking made by a caller known only by the contact details"""
    details: GuestDetails


GuestReference = Union[RegisteredAccount, AdHocContact]


@dataclass(frozen=True)
class RoomSummary(ValueObject):
    """Room data joined into booking reads, never stored on the booking"""
    id: int
    name: str
    room_type: str
    main_image: str | None = None


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - check-out strictly after check-in (enforced by DateRange)
    - final_amount = total_amount - discount_applied, none negative
    - status only moves along ALLOWED_TRANSITIONS
    - guest reference never changes after admission
    """

    booking_code: str
    room_id: int | None
    guest: GuestReference
    contact: GuestDetails
    dates: DateRange
    booking_type: BookingType
    total_amount: Money
    discount_applied: Money
    final_amount: Money
    status: BookingStatus = BookingStatus.DRAFT
    payment_status: PaymentStatus = PaymentStatus.PENDING
    special_requests: str = ''

    # Read side only
    room: RoomSummary | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.discount_applied.amount < 0:
            raise ValueError("Discount cannot be negative")
        if self.final_amount != self.total_amount - self.discount_applied:
            raise ValueError("Final amount must equal total amount minus discount")

    @classmethod
    def admit(
        cls,
        *,
        booking_code: str,
        room_id: int,
        guest: GuestReference,
        contact: GuestDetails,
        dates: DateRange,
        booking_type: BookingType,
        quote: PriceQuote,
        special_requests: str = '',
    ) -> 'Booking':
        """New booking in DRAFT, priced by quote"""
        return cls(
            booking_code=booking_code,
            room_id=room_id,
            guest=guest,
            contact=contact,
            dates=dates,
            booking_type=booking_type,
            total_amount=quote.total,
            discount_applied=quote.discount,
            final_amount=quote.final,
            special_requests=special_requests,
        )

    @staticmethod
    def generate_booking_code(prefix: str = 'BK') -> str:
        return f"{prefix}-{secrets.token_hex(4).upper()}"

    @property
    def account_id(self) -> UUID | None:
        if isinstance(self.guest, RegisteredAccount):
            return self.guest.account_id
        return None

    @property
    def room_name(self) -> str:
        return self.room.name if self.room else ''

    def transition_to(self, new_status: BookingStatus) -> BookingStatus:
        """
        Move to new_status

        Returns the previous status.

        Raises:
            Conflict: the state machine does not allow the move
        """
        if not self.status.can_transition_to(new_status):
            raise Conflict(
                f"Booking with status {self.status.value} cannot be transitioned "
                f"to {new_status.value}"
            )

        from apps.bookings.domain.events import BookingStatusChanged

        old_status = self.status
        self.status = new_status
        self.updated_at = timezone.now()

        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value,
            final_amount=self.final_amount.amount,
            currency=self.final_amount.currency,
            **self._event_payload()
        ))
        return old_status

    def cancel(self, cancelled_by: UUID | None = None) -> BookingStatus:
        """
        Cancel from DRAFT or CONFIRMED

        Returns the previous status.

        Raises:
            Conflict: booking is already cancelled or completed
        """
        if self.status.is_terminal:
            raise Conflict(
                f"Booking with status {self.status.value} cannot be cancelled"
            )

        from apps.bookings.domain.events import BookingCancelled

        old_status = self.status
        self.status = BookingStatus.CANCELLED
        self.updated_at = timezone.now()

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            old_status=old_status.value,
            cancelled_by=cancelled_by,
            **self._event_payload()
        ))
        return old_status

    def _event_payload(self) -> Dict[str, Any]:
        return {
            'booking_id': self.id,
            'booking_code': self.booking_code,
            'room_id': self.room_id,
            'room_name': self.room_name,
            'guest_name': self.contact.name,
            'guest_email': self.contact.email,
            'check_in': self.dates.start_date,
            'check_out': self.dates.end_date,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for the routing layer"""
        return {
            'id': str(self.id),
            'booking_code': self.booking_code,
            'account_id': str(self.account_id) if self.account_id else None,
            'room_id': self.room_id,
            'room': (
                {
                    'id': self.room.id,
                    'name': self.room.name,
                    'room_type': self.room.room_type,
                    'main_image': self.room.main_image,
                }
                if self.room else None
            ),
            'check_in': self.dates.start_date.isoformat(),
            'check_out': self.dates.end_date.isoformat(),
            'booking_type': self.booking_type.value,
            'total_amount': str(self.total_amount.amount),
            'discount_applied': str(self.discount_applied.amount),
            'final_amount': str(self.final_amount.amount),
            'currency': self.final_amount.currency,
            'status': self.status.value,
            'payment_status': self.payment_status.value,
            'guest_details': self.contact.to_dict(),
            'special_requests': self.special_requests,
            'created_at': self.created_at.isoformat(),
        }

    def __str__(self):
        return f"Booking {self.booking_code} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, booking_code={self.booking_code}, "
            f"status={self.status.value}, dates={self.dates!r})"
        )
