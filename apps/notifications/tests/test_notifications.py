"""Guest emails are sent after commit and never break a booking operation."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from smtplib import SMTPException
from uuid import uuid4

import pytest
from django.core import mail
from django.core.mail.backends.base import BaseEmailBackend

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    SetBookingStatusCommand,
    SetBookingStatusHandler,
)
from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingStatusChanged
from apps.bookings.models import Booking
from apps.notifications import subscribers
from apps.notifications.services import (
    EmailNotifier,
    booking_cancelled_message,
    booking_created_message,
    status_changed_message,
)
from shared.domain.exceptions import Conflict

pytestmark = pytest.mark.django_db


class FailingEmailBackend(BaseEmailBackend):
    def send_messages(self, email_messages):
        raise SMTPException("relay refused")


def test_admission_sends_draft_confirmation(book, room, guest, guest_account, stay_start, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        booking = book(room, stay_start, stay_start + timedelta(days=3), principal=guest)

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.to == ["asha@example.com"]
    assert message.subject == "Shangarh Stays - Booking Confirmation (DRAFT)"
    html = message.alternatives[0][0]
    assert booking.booking_code in html
    assert room.name in html
    assert "₹10500.00" in html
    assert str(guest_account.id) in html


def test_nothing_is_sent_when_admission_fails(book, room, stay_start, django_capture_on_commit_callbacks):
    book(room, stay_start, stay_start + timedelta(days=3))
    mail.outbox.clear()

    with django_capture_on_commit_callbacks(execute=True):
        with pytest.raises(Conflict):
            book(room, stay_start, stay_start + timedelta(days=1))

    assert mail.outbox == []


def test_failing_mail_server_does_not_fail_admission(book, room, settings, stay_start, django_capture_on_commit_callbacks):
    settings.EMAIL_BACKEND = "apps.notifications.tests.test_notifications.FailingEmailBackend"

    with django_capture_on_commit_callbacks(execute=True):
        booking = book(room, stay_start, stay_start + timedelta(days=3))

    assert Booking.objects.filter(pk=booking.id, status=Booking.Status.DRAFT).exists()
    assert mail.outbox == []


def test_failing_queue_does_not_fail_admission(book, room, monkeypatch, stay_start, django_capture_on_commit_callbacks):
    class UnreachableBroker:
        @staticmethod
        def delay(*args, **kwargs):
            raise ConnectionError("broker unreachable")

    monkeypatch.setattr(subscribers, "deliver_email", UnreachableBroker)

    with django_capture_on_commit_callbacks(execute=True):
        booking = book(room, stay_start, stay_start + timedelta(days=3))

    assert Booking.objects.filter(pk=booking.id).exists()


def test_status_change_and_cancellation_emails(book, room, admin, guest, stay_start, django_capture_on_commit_callbacks):
    booking = book(room, stay_start, stay_start + timedelta(days=3), principal=guest)
    mail.outbox.clear()

    with django_capture_on_commit_callbacks(execute=True):
        SetBookingStatusHandler().handle(
            SetBookingStatusCommand(booking_id=booking.id, status="confirmed", principal=admin)
        )
    with django_capture_on_commit_callbacks(execute=True):
        CancelBookingHandler().handle(CancelBookingCommand(booking_id=booking.id, principal=guest))

    assert [m.subject for m in mail.outbox] == [
        "Shangarh Stays - Booking CONFIRMED",
        "Shangarh Stays - Booking Cancelled",
    ]
    assert "We look forward to welcoming you!" in mail.outbox[0].alternatives[0][0]
    assert room.name in mail.outbox[1].body


def test_notifier_reports_failure(settings):
    settings.EMAIL_BACKEND = "apps.notifications.tests.test_notifications.FailingEmailBackend"

    assert EmailNotifier().send("asha@example.com", "Hello", "<p>Hi</p>") is False


def test_notifier_sends_plain_text_alternative():
    assert EmailNotifier().send("asha@example.com", "Hello", "<p>Hi <strong>there</strong></p>") is True

    assert mail.outbox[0].body == "Hi there"


def test_ad_hoc_confirmation_has_no_discount_id(settings):
    settings.HOTEL_NAME = "Shangarh Stays Annexe"
    event = BookingCreated(
        booking_id=uuid4(),
        booking_code="BK-0A1B2C3D",
        room_id=1,
        room_name="Deodar Suite",
        guest_name="Walk-in",
        guest_email="walkin@example.com",
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 3),
        booking_type="daily",
        total_amount=Decimal("7000.00"),
        discount_applied=Decimal("0.00"),
        final_amount=Decimal("7000.00"),
        currency="INR",
        account_id=None,
    )

    message = booking_created_message(event)

    assert message.subject == "Shangarh Stays Annexe - Booking Confirmation (DRAFT)"
    assert "User ID" not in message.body
    assert "Sun Jun 01 2025" in message.body


def test_room_names_are_html_escaped():
    shared = dict(
        booking_id=uuid4(),
        booking_code="BK-0A1B2C3D",
        room_id=1,
        room_name="<b>Pine</b> & Cedar",
        guest_name="Asha Verma",
        guest_email="asha@example.com",
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 3),
    )
    messages = [
        booking_created_message(BookingCreated(
            booking_type="daily",
            total_amount=Decimal("7000.00"),
            discount_applied=Decimal("0.00"),
            final_amount=Decimal("7000.00"),
            currency="INR",
            account_id=None,
            **shared,
        )),
        status_changed_message(BookingStatusChanged(
            old_status="draft",
            new_status="confirmed",
            final_amount=Decimal("7000.00"),
            currency="INR",
            **shared,
        )),
        booking_cancelled_message(BookingCancelled(
            old_status="draft",
            cancelled_by=None,
            **shared,
        )),
    ]

    for message in messages:
        assert "&lt;b&gt;Pine&lt;/b&gt; &amp; Cedar" in message.body
        assert "<b>Pine</b>" not in message.body
