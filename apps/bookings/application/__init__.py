"""Booking use cases: admission, status changes, cancellation and reads."""
