"""Guest email notifications for booking events."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import NamedTuple

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCreated,
    BookingStatusChanged,
)

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {"INR": "₹"}

STATUS_CLOSINGS = {
    "confirmed": "<p>We look forward to welcoming you!</p>",
    "cancelled": "<p>We hope to serve you in the future.</p>",
    "completed": "<p>Thank you for staying with us. We hope you had a pleasant stay!</p>",
}


class EmailMessage(NamedTuple):
    recipient: str
    subject: str
    body: str


class EmailNotifier:
    """Best-effort email delivery through Django's configured backend."""

    def send(self, recipient: str, subject: str, body: str) -> bool:
        """
        Send an HTML email with a plain text alternative.

        Returns:
            bool: True if the backend accepted the message
        """
        try:
            send_mail(
                subject=subject,
                message=strip_tags(body),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[recipient],
                html_message=body,
                fail_silently=False,
            )
        except Exception as e:
            logger.error(f"Failed to send email to {recipient}: {e}", exc_info=True)
            return False

        logger.info(f"Email sent successfully to {recipient}: {subject}")
        return True


def _hotel_name() -> str:
    return getattr(settings, "HOTEL_NAME", "Shangarh Stays")


def _money(amount: Decimal, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:.2f}"
    return f"{amount:.2f} {currency}"


def _day(value: date) -> str:
    return value.strftime("%a %b %d %Y")


def booking_created_message(event: BookingCreated) -> EmailMessage:
    """Draft confirmation, including the id to quote for the next discount."""
    hotel = _hotel_name()
    body = f"""
    <h1>Booking Confirmation</h1>
    <p>Thank you for booking with {hotel}!</p>
    <p>Your booking ID is: <strong>{event.booking_code}</strong></p>
    <p>Status: <strong>DRAFT (Pending Admin Approval)</strong></p>
    <h2>Booking Details:</h2>
    <ul>
        <li>Room: {escape(event.room_name)}</li>
        <li>Check-in: {_day(event.check_in)}</li>
        <li>Check-out: {_day(event.check_out)}</li>
        <li>Booking Type: {event.booking_type}</li>
        <li>Total Amount: {_money(event.total_amount, event.currency)}</li>
        <li>Discount Applied: {_money(event.discount_applied, event.currency)}</li>
        <li>Final Amount: {_money(event.final_amount, event.currency)}</li>
    </ul>
    """
    if event.account_id:
        body += f"""
    <p>Your User ID for future bookings: <strong>{event.account_id}</strong></p>
    <p>Use this ID for your next booking to get a discount!</p>
    """
    body += """
    <p>We will send you a final confirmation once your booking is approved by our admin.</p>
    """
    return EmailMessage(
        recipient=event.guest_email,
        subject=f"{hotel} - Booking Confirmation (DRAFT)",
        body=body,
    )


def status_changed_message(event: BookingStatusChanged) -> EmailMessage:
    hotel = _hotel_name()
    status = event.new_status.upper()
    body = f"""
    <h1>Booking Status Update</h1>
    <p>Your booking status has been updated.</p>
    <p>Booking ID: <strong>{event.booking_code}</strong></p>
    <p>New Status: <strong>{status}</strong></p>
    <h2>Booking Details:</h2>
    <ul>
        <li>Room: {escape(event.room_name)}</li>
        <li>Check-in: {_day(event.check_in)}</li>
        <li>Check-out: {_day(event.check_out)}</li>
        <li>Final Amount: {_money(event.final_amount, event.currency)}</li>
    </ul>
    {STATUS_CLOSINGS.get(event.new_status, "")}
    """
    return EmailMessage(
        recipient=event.guest_email,
        subject=f"{hotel} - Booking {status}",
        body=body,
    )


def booking_cancelled_message(event: BookingCancelled) -> EmailMessage:
    hotel = _hotel_name()
    body = f"""
    <h1>Booking Cancellation</h1>
    <p>Your booking has been cancelled.</p>
    <p>Booking ID: <strong>{event.booking_code}</strong></p>
    <h2>Booking Details:</h2>
    <ul>
        <li>Room: {escape(event.room_name)}</li>
        <li>Check-in: {_day(event.check_in)}</li>
        <li>Check-out: {_day(event.check_out)}</li>
    </ul>
    <p>We hope to serve you in the future.</p>
    """
    return EmailMessage(
        recipient=event.guest_email,
        subject=f"{hotel} - Booking Cancelled",
        body=body,
    )
