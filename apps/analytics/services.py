"""Admin reporting over bookings, rooms and accounts.

Revenue only counts confirmed bookings, summed over their final amount.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

from django.db import models  # type: ignore

from apps.bookings.domain.entities import BookingStatus
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.rooms.models import Room
from apps.users.models import Account
from apps.users.principal import Principal
from shared.domain.exceptions import Forbidden

RECENT_BOOKINGS_LIMIT = 5


def _require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise Forbidden("Only administrators can view reports")


def _revenue(queryset) -> Decimal:
    return queryset.aggregate(total=models.Sum("final_amount")).get("total") or Decimal("0")


def dashboard_stats(principal: Principal) -> Dict[str, Any]:
    """Headline numbers for the admin dashboard."""

    _require_admin(principal)

    counts = {
        row["status"]: row["count"]
        for row in Booking.objects.values("status").annotate(count=models.Count("id"))
    }
    recent = Booking.objects.select_related("room").order_by("-created_at")[:RECENT_BOOKINGS_LIMIT]

    return {
        "total_revenue": _revenue(Booking.objects.filter(status=Booking.Status.CONFIRMED)),
        "bookings": {
            "total": sum(counts.values()),
            "confirmed": counts.get(Booking.Status.CONFIRMED, 0),
            "draft": counts.get(Booking.Status.DRAFT, 0),
            "cancelled": counts.get(Booking.Status.CANCELLED, 0),
            "completed": counts.get(Booking.Status.COMPLETED, 0),
        },
        "rooms": {
            "total": Room.objects.count(),
            "available": Room.objects.filter(is_available=True).count(),
        },
        "users": {
            "total": Account.objects.filter(role=Account.RoleChoices.USER).count(),
        },
        "recent_bookings": [
            {
                "id": str(booking.id),
                "booking_code": booking.booking_code,
                "room_name": booking.room.name if booking.room else None,
                "status": booking.status,
                "final_amount": booking.final_amount,
                "created_at": booking.created_at,
            }
            for booking in recent
        ],
    }


def revenue_report(
    principal: Principal,
    start: datetime | None = None,
    end: datetime | None = None,
) -> Dict[str, Any]:
    """Confirmed revenue, optionally limited to bookings created in [start, end].

    The period only applies when both bounds are given.
    """

    _require_admin(principal)

    bookings = Booking.objects.filter(status=Booking.Status.CONFIRMED)
    if start and end:
        bookings = bookings.filter(created_at__gte=start, created_at__lte=end)

    room_type_revenue = {
        row["room__room_type"]: row["total"]
        for row in bookings.filter(room__isnull=False)
        .values("room__room_type")
        .annotate(total=models.Sum("final_amount"))
    }

    booking_type_revenue = {choice: Decimal("0") for choice in Booking.BookingType.values}
    for row in bookings.values("booking_type").annotate(total=models.Sum("final_amount")):
        booking_type_revenue[row["booking_type"]] = row["total"]

    return {
        "total_revenue": _revenue(bookings),
        "bookings_count": bookings.count(),
        "room_type_revenue": room_type_revenue,
        "booking_type_revenue": booking_type_revenue,
    }


def pending_bookings(principal: Principal) -> List[Dict[str, Any]]:
    """Draft bookings awaiting an admin decision, with room and guest account."""

    _require_admin(principal)

    accounts = {
        account.pk: {"id": str(account.pk), "name": account.name, "email": account.email}
        for account in Account.objects.filter(bookings__status=Booking.Status.DRAFT).distinct()
    }

    pending = []
    for booking in DjangoBookingRepository().list_by_status(BookingStatus.DRAFT):
        entry = booking.to_dict()
        entry["account"] = accounts.get(booking.account_id)
        pending.append(entry)
    return pending
