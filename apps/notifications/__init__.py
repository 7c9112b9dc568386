"""Notifications app package.

Emails the guest when a booking is admitted, changes status or is
cancelled. Delivery runs through Celery after the booking transaction
commits and never affects the booking operation itself.
"""
