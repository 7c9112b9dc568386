"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Admit a new booking in draft
- SetBookingStatusCommand: Admin moves a booking along its lifecycle
- CancelBookingCommand: Owner or admin cancels a booking
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID
import logging

from django.conf import settings

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import Conflict, Forbidden, InvalidInput
from shared.domain.value_objects import DateRange

from apps.bookings.domain.entities import (
    AdHocContact,
    Booking,
    BookingStatus,
    GuestDetails,
    GuestReference,
    RegisteredAccount,
    RoomSummary,
)
from apps.bookings.domain.events import BookingCreated
from apps.bookings.domain.pricing import BookingType, calculate_price
from apps.bookings.repositories import DjangoBookingRepository
from apps.bookings.serializers import BookingRequestSerializer, BookingStatusSerializer
from apps.bookings.services import room_admission_lock
from apps.users.principal import Principal
from apps.users.services import DiscountEligibilityTracker

logger = logging.getLogger(__name__)

BOOKING_CODE_ATTEMPTS = 5


def discount_rate() -> Decimal:
    return Decimal(str(getattr(settings, 'BOOKING_DISCOUNT_RATE', '0.05')))


def booking_currency() -> str:
    return getattr(settings, 'BOOKING_CURRENCY', 'INR')


def _validated(serializer, message: str) -> dict:
    if not serializer.is_valid():
        raise InvalidInput(message, errors=serializer.errors)
    return serializer.validated_data


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to admit a new booking

    prior_guest_id is the account id a returning guest quotes to claim
    the discount; it may differ from the caller.
    """
    room_id: int
    check_in: date
    check_out: date
    booking_type: str
    guest_details: Mapping[str, Any]
    principal: Principal = field(default_factory=Principal.anonymous)
    prior_guest_id: UUID | None = None
    special_requests: str = ''


@dataclass
class SetBookingStatusCommand:
    """Command for an admin to set a booking's status"""
    booking_id: UUID
    status: str
    principal: Principal


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: UUID
    principal: Principal


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Double bookings are prevented in layers:
    1. Per-room admission lock held until after commit
    2. Start database transaction (atomic)
    3. Load the room with SELECT FOR UPDATE where supported
    4. Check the room's inventory in the domain (can_allocate)
    5. Parse the booking type, price, resolve discount, create the Booking aggregate
    6. Allocate dates in the inventory and store the booking
    7. Commit, then publish BookingCreated
    """

    def __init__(self, booking_repo=None, eligibility=None, bus: MessageBus | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.eligibility = eligibility or DiscountEligibilityTracker()
        self.bus = bus

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Handle booking admission

        Returns: Created Booking aggregate in DRAFT

        Raises:
            InvalidInput: dates or guest details are invalid, or (once the
                room is known to be free) the booking type is unknown
            NotFound: room does not exist
            Conflict: room switched off or dates taken
        """
        data = _validated(
            BookingRequestSerializer(data={
                'room_id': command.room_id,
                'check_in': command.check_in,
                'check_out': command.check_out,
                'booking_type': command.booking_type,
                'guest_details': command.guest_details,
                'special_requests': command.special_requests,
                'prior_guest_id': command.prior_guest_id,
            }),
            'Invalid booking request',
        )

        dates = DateRange(data['check_in'], data['check_out'])
        contact = GuestDetails(**data['guest_details'])
        prior_guest_id = data['prior_guest_id']
        principal = command.principal

        logger.info(
            f"Admitting booking for room {data['room_id']}, "
            f"caller {principal.account_id}, dates {dates}"
        )

        with room_admission_lock(data['room_id']):
            with DjangoUnitOfWork(self.bus) as uow:
                room = self.booking_repo.get_room(data['room_id'], lock=True)

                if not room.is_available:
                    raise Conflict('This room is not available for booking')

                inventory = self.booking_repo.get_inventory(room.pk)
                if not inventory.can_allocate(dates):
                    raise Conflict('Room is not available for the selected dates')

                booking_type = BookingType.parse(data['booking_type'])
                guest, eligible = self._resolve_guest(principal, prior_guest_id, contact)

                quote = calculate_price(
                    room.rates,
                    dates,
                    booking_type,
                    discount_eligible=eligible,
                    discount_rate=discount_rate(),
                    currency=booking_currency(),
                )

                booking = Booking.admit(
                    booking_code=self._new_booking_code(),
                    room_id=room.pk,
                    guest=guest,
                    contact=contact,
                    dates=dates,
                    booking_type=booking_type,
                    quote=quote,
                    special_requests=data['special_requests'],
                )
                booking.room = RoomSummary(
                    id=room.pk,
                    name=room.name,
                    room_type=room.room_type,
                    main_image=room.main_image,
                )

                inventory.allocate(booking.id, dates, booking.booking_code)
                self.booking_repo.add(booking)

                if prior_guest_id is None and principal.account_id is not None:
                    self.eligibility.mark_eligible(principal.account_id)

                booking.add_event(BookingCreated(
                    aggregate_id=booking.id,
                    booking_id=booking.id,
                    booking_code=booking.booking_code,
                    room_id=room.pk,
                    room_name=room.name,
                    guest_name=contact.name,
                    guest_email=contact.email,
                    check_in=dates.start_date,
                    check_out=dates.end_date,
                    booking_type=booking_type.value,
                    total_amount=quote.total.amount,
                    discount_applied=quote.discount.amount,
                    final_amount=quote.final.amount,
                    currency=quote.final.currency,
                    account_id=booking.account_id,
                ))
                uow.collect_events(booking)

        logger.info(
            f"Booking created successfully: {booking.booking_code} "
            f"(ID: {booking.id}, final amount {booking.final_amount})"
        )

        return booking

    def _resolve_guest(
        self,
        principal: Principal,
        prior_guest_id: UUID | None,
        contact: GuestDetails,
    ) -> tuple[GuestReference, bool]:
        """
        Decide who the booking belongs to and whether the discount applies

        A quoted prior guest id only counts when that account is eligible;
        otherwise the booking belongs to the caller.
        """
        if prior_guest_id is not None and self.eligibility.is_eligible(prior_guest_id):
            return RegisteredAccount(account_id=prior_guest_id), True
        if principal.account_id is not None:
            return RegisteredAccount(account_id=principal.account_id), False
        return AdHocContact(details=contact), False

    def _new_booking_code(self) -> str:
        prefix = getattr(settings, 'BOOKING_CODE_PREFIX', 'BK')
        for _ in range(BOOKING_CODE_ATTEMPTS):
            code = Booking.generate_booking_code(prefix)
            if not self.booking_repo.code_exists(code):
                return code
        raise Conflict('Could not allocate a booking code, please retry')


class SetBookingStatusHandler:
    """Handler for admin status updates"""

    def __init__(self, booking_repo=None, bus: MessageBus | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.bus = bus

    def handle(self, command: SetBookingStatusCommand) -> Booking:
        """
        Raises:
            Forbidden: caller is not an admin
            InvalidInput: status outside draft/confirmed/cancelled/completed
            NotFound: booking does not exist
            Conflict: transition not allowed or lost a concurrent update
        """
        if not command.principal.is_admin:
            raise Forbidden('Only administrators can update booking status')

        data = _validated(BookingStatusSerializer(data={'status': command.status}), 'Invalid status')
        new_status = BookingStatus(data['status'])

        logger.info(f"Setting booking {command.booking_id} to {new_status.value}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self.booking_repo.get_by_id(command.booking_id)
            old_status = booking.transition_to(new_status)
            self.booking_repo.compare_and_set_status(booking, expected=old_status)
            uow.collect_events(booking)

        logger.info(
            f"Booking {booking.booking_code} moved from {old_status.value} "
            f"to {new_status.value}"
        )
        return booking


class CancelBookingHandler:
    """Handler for cancelling booking"""

    def __init__(self, booking_repo=None, bus: MessageBus | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.bus = bus

    def handle(self, command: CancelBookingCommand) -> Booking:
        """
        Raises:
            NotFound: booking does not exist
            Forbidden: caller neither owns the booking nor is an admin
            Conflict: booking already cancelled or completed
        """
        principal = command.principal
        logger.info(f"Cancelling booking {command.booking_id} on behalf of {principal.account_id}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self.booking_repo.get_by_id(command.booking_id)

            if not (principal.is_admin or principal.owns(booking.account_id)):
                raise Forbidden(
                    f"User {principal.account_id} is not authorized to cancel this booking"
                )

            old_status = booking.cancel(cancelled_by=principal.account_id)
            self.booking_repo.compare_and_set_status(booking, expected=old_status)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_code} cancelled successfully")
        return booking
