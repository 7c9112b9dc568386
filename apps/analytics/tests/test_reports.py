"""Tests for the admin dashboard, revenue report and pending list."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.analytics.services import dashboard_stats, pending_bookings, revenue_report
from apps.bookings.application.command_handlers import (
    SetBookingStatusCommand,
    SetBookingStatusHandler,
)
from apps.rooms.models import Room
from shared.domain.exceptions import Forbidden

pytestmark = pytest.mark.django_db


@pytest.fixture
def bookings(book, make_room, admin, guest, stay_start):
    """One confirmed daily suite, one confirmed weekly family room, one draft, one cancelled."""

    suite = make_room(name="Deodar Suite")
    family = make_room(name="Orchard Family Room", room_type=Room.RoomType.FAMILY)
    standard = make_room(name="Cedar Standard", room_type=Room.RoomType.STANDARD, is_available=True)

    confirmed_daily = book(suite, stay_start, stay_start + timedelta(days=3), principal=guest)
    confirmed_weekly = book(family, stay_start, stay_start + timedelta(days=7), booking_type="weekly")
    draft = book(standard, stay_start, stay_start + timedelta(days=1), principal=guest)
    cancelled = book(suite, stay_start + timedelta(days=10), stay_start + timedelta(days=12))

    handler = SetBookingStatusHandler()
    for booking, status in [
        (confirmed_daily, "confirmed"),
        (confirmed_weekly, "confirmed"),
        (cancelled, "cancelled"),
    ]:
        handler.handle(SetBookingStatusCommand(booking_id=booking.id, status=status, principal=admin))

    return {
        "confirmed_daily": confirmed_daily,
        "confirmed_weekly": confirmed_weekly,
        "draft": draft,
        "cancelled": cancelled,
    }


def test_reports_are_admin_only(guest):
    with pytest.raises(Forbidden):
        dashboard_stats(guest)
    with pytest.raises(Forbidden):
        revenue_report(guest)
    with pytest.raises(Forbidden):
        pending_bookings(guest)


def test_dashboard_counts_and_revenue(bookings, admin, make_room, guest_account, other_account):
    make_room(name="Closed for repairs", is_available=False)

    stats = dashboard_stats(admin)

    assert stats["total_revenue"] == Decimal("31500.00")
    assert stats["bookings"] == {
        "total": 4,
        "confirmed": 2,
        "draft": 1,
        "cancelled": 1,
        "completed": 0,
    }
    assert stats["rooms"] == {"total": 4, "available": 3}
    assert stats["users"] == {"total": 2}
    assert len(stats["recent_bookings"]) == 4
    assert {b["room_name"] for b in stats["recent_bookings"]} == {
        "Deodar Suite",
        "Orchard Family Room",
        "Cedar Standard",
    }


def test_revenue_report_breakdowns(bookings, admin):
    report = revenue_report(admin)

    assert report["total_revenue"] == Decimal("31500.00")
    assert report["bookings_count"] == 2
    assert report["room_type_revenue"] == {
        "suite": Decimal("10500.00"),
        "family": Decimal("21000.00"),
    }
    assert report["booking_type_revenue"] == {
        "daily": Decimal("10500.00"),
        "weekly": Decimal("21000.00"),
        "monthly": Decimal("0"),
    }


def test_revenue_report_period_needs_both_bounds(bookings, admin):
    long_ago = timezone.now() - timedelta(days=365)
    a_while_ago = timezone.now() - timedelta(days=300)

    assert revenue_report(admin, start=long_ago, end=a_while_ago)["bookings_count"] == 0
    assert revenue_report(admin, start=long_ago)["bookings_count"] == 2
    assert revenue_report(admin, end=a_while_ago)["bookings_count"] == 2
    assert revenue_report(admin, start=long_ago, end=timezone.now())["bookings_count"] == 2


def test_pending_bookings_lists_drafts_with_guest(bookings, admin, guest_account):
    pending = pending_bookings(admin)

    assert [p["booking_code"] for p in pending] == [bookings["draft"].booking_code]
    assert pending[0]["room"]["name"] == "Cedar Standard"
    assert pending[0]["account"] == {
        "id": str(guest_account.id),
        "name": guest_account.name,
        "email": guest_account.email,
    }
