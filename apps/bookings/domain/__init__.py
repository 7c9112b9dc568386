"""Booking domain model: pure Python, no ORM access."""
