"""Bookings app package.

Admission and pricing of room bookings: the booking aggregate and its
lifecycle, the overlap index that keeps a room from being booked twice
for the same dates, and the handlers that run each operation inside a
database transaction.
"""
