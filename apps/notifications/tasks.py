"""Celery tasks for guest notifications."""

from __future__ import annotations

from celery import shared_task  # type: ignore

from .services import EmailNotifier


@shared_task(name="notifications.deliver_email", ignore_result=True)
def deliver_email(recipient: str, subject: str, body: str) -> bool:
    """Send one email; failures are logged by the notifier, never retried."""

    return EmailNotifier().send(recipient, subject, body)
