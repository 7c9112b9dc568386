"""
Booking Repository

Translates between the ``Booking`` Django model and the domain
aggregate. All storage access of the booking lifecycle goes through
here, so the handlers never touch the ORM directly.
"""

from typing import List
from uuid import UUID
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from shared.domain.exceptions import Conflict, NotFound
from shared.domain.value_objects import DateRange, Money

from apps.bookings.domain.entities import (
    AdHocContact,
    BLOCKING_STATUSES,
    Booking,
    BookingStatus,
    GuestDetails,
    PaymentStatus,
    RegisteredAccount,
    RoomSummary,
)
from apps.bookings.domain.inventory import Allocation, RoomInventory
from apps.bookings.domain.pricing import BookingType
from apps.bookings.models import Booking as BookingModel
from apps.rooms.models import Room

logger = logging.getLogger(__name__)


def _to_domain(model: BookingModel) -> Booking:
    contact = GuestDetails(
        name=model.guest_name,
        email=model.guest_email,
        phone=model.guest_phone,
        address=model.guest_address,
        id_proof=model.guest_id_proof,
    )
    if model.account_id:
        guest = RegisteredAccount(account_id=model.account_id)
    else:
        guest = AdHocContact(details=contact)

    room = None
    if model.room_id is not None:
        room = RoomSummary(
            id=model.room.pk,
            name=model.room.name,
            room_type=model.room.room_type,
            main_image=model.room.main_image,
        )

    return Booking(
        id=model.id,
        created_at=model.created_at,
        updated_at=model.updated_at,
        booking_code=model.booking_code,
        room_id=model.room_id,
        guest=guest,
        contact=contact,
        dates=DateRange(model.check_in, model.check_out),
        booking_type=BookingType(model.booking_type),
        total_amount=Money(model.total_amount, model.currency),
        discount_applied=Money(model.discount_applied, model.currency),
        final_amount=Money(model.final_amount, model.currency),
        status=BookingStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        special_requests=model.special_requests,
        room=room,
    )


class DjangoBookingRepository:
    """
    Repository for the Booking aggregate

    Usage:
        with DjangoUnitOfWork() as uow:
            room = repo.get_room(room_id, lock=True)
            inventory = repo.get_inventory(room.pk)
            inventory.allocate(booking.id, booking.dates)
            repo.add(booking)
    """

    def __init__(self):
        self._queryset = BookingModel.objects.select_related('room')

    def get_by_id(self, booking_id: UUID) -> Booking:
        """
        Raises:
            NotFound: no booking with that id
        """
        try:
            return _to_domain(self._queryset.get(pk=booking_id))
        except (BookingModel.DoesNotExist, ValidationError, ValueError):
            raise NotFound(f"Booking not found with id of {booking_id}")

    def list_all(self) -> List[Booking]:
        return [_to_domain(m) for m in self._queryset.all()]

    def list_for_account(self, account_id: UUID) -> List[Booking]:
        return [_to_domain(m) for m in self._queryset.filter(account_id=account_id)]

    def list_by_status(self, status: BookingStatus) -> List[Booking]:
        return [_to_domain(m) for m in self._queryset.filter(status=status.value)]

    def list_active_for_room(self, room_id: int) -> List[Booking]:
        return [
            _to_domain(m)
            for m in self._queryset.filter(
                room_id=room_id,
                status__in=[s.value for s in BLOCKING_STATUSES],
            ).order_by('check_in')
        ]

    def get_room(self, room_id: int, lock: bool = False) -> Room:
        """
        Load the room, optionally taking a row lock

        The row lock serializes admissions for the same room across
        processes on databases that support SELECT FOR UPDATE.

        Raises:
            NotFound: room does not exist
        """
        queryset = Room.objects.all()
        if lock and transaction.get_connection().features.has_select_for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=room_id)
        except (Room.DoesNotExist, ValueError):
            raise NotFound(f"Room not found with id of {room_id}")

    def get_inventory(self, room_id: int) -> RoomInventory:
        """Allocations of all draft and confirmed bookings of the room"""
        rows = BookingModel.objects.filter(
            room_id=room_id,
            status__in=[s.value for s in BLOCKING_STATUSES],
        ).values_list('id', 'booking_code', 'check_in', 'check_out')

        return RoomInventory(
            room_id=room_id,
            allocations=[
                Allocation(
                    booking_id=booking_id,
                    booking_code=code,
                    dates=DateRange(check_in, check_out),
                )
                for booking_id, code, check_in, check_out in rows
            ],
        )

    def code_exists(self, booking_code: str) -> bool:
        return BookingModel.objects.filter(booking_code=booking_code).exists()

    def add(self, booking: Booking) -> None:
        """
        Insert a new booking

        Raises:
            Conflict: the database rejected the row (duplicate code or
                a violated constraint)
        """
        try:
            with transaction.atomic():
                BookingModel.objects.create(
                    id=booking.id,
                    booking_code=booking.booking_code,
                    account_id=booking.account_id,
                    room_id=booking.room_id,
                    check_in=booking.dates.start_date,
                    check_out=booking.dates.end_date,
                    booking_type=booking.booking_type.value,
                    total_amount=booking.total_amount.amount,
                    discount_applied=booking.discount_applied.amount,
                    final_amount=booking.final_amount.amount,
                    currency=booking.final_amount.currency,
                    status=booking.status.value,
                    payment_status=booking.payment_status.value,
                    guest_name=booking.contact.name,
                    guest_email=booking.contact.email,
                    guest_phone=booking.contact.phone,
                    guest_address=booking.contact.address,
                    guest_id_proof=booking.contact.id_proof,
                    special_requests=booking.special_requests,
                    created_at=booking.created_at,
                    updated_at=booking.updated_at,
                )
        except IntegrityError as e:
            logger.warning(f"Booking {booking.booking_code} rejected by the database: {e}")
            raise Conflict("Booking could not be stored, please retry") from e

    def compare_and_set_status(self, booking: Booking, expected: BookingStatus) -> None:
        """
        Persist booking.status only if the stored status is still expected

        Raises:
            Conflict: someone changed the booking in between
        """
        updated = BookingModel.objects.filter(
            pk=booking.id,
            status=expected.value,
        ).update(status=booking.status.value, updated_at=booking.updated_at)

        if not updated:
            raise Conflict(
                f"Booking {booking.booking_code} was modified concurrently, "
                f"expected status {expected.value}"
            )
