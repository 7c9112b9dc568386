"""
Booking Queries

Read side of the booking lifecycle. Results are Booking aggregates with
the room summary joined in, so callers never follow the room reference
themselves.
"""

from typing import List
from uuid import UUID

from shared.domain.exceptions import Forbidden

from apps.bookings.domain.entities import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.users.principal import Principal


class BookingQueries:

    def __init__(self, booking_repo=None):
        self.booking_repo = booking_repo or DjangoBookingRepository()

    def get_booking(self, booking_id: UUID, principal: Principal) -> Booking:
        """
        Raises:
            NotFound: booking does not exist
            Forbidden: caller neither owns the booking nor is an admin
        """
        booking = self.booking_repo.get_by_id(booking_id)
        if not (principal.is_admin or principal.owns(booking.account_id)):
            raise Forbidden(
                f"User {principal.account_id} is not authorized to access this booking"
            )
        return booking

    def list_bookings(self, principal: Principal) -> List[Booking]:
        """Admins see every booking, everyone else only their own"""
        if principal.is_admin:
            return self.booking_repo.list_all()
        if principal.account_id is None:
            return []
        return self.booking_repo.list_for_account(principal.account_id)
