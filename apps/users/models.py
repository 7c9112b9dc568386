"""Account model for Shangarh Stays.

Authentication happens outside the booking core; an ``Account`` is the
resolved identity a request acts for. Besides role it carries the
returning-guest discount flag, which only the discount eligibility
tracker changes.
"""

from __future__ import annotations

import uuid

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Account(models.Model):
    """Registered guest or administrator."""

    class RoleChoices(models.TextChoices):
        USER = "user", _("Guest")
        ADMIN = "admin", _("Administrator")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True)
    role = models.CharField(
        max_length=10,
        choices=RoleChoices.choices,
        default=RoleChoices.USER,
    )
    discount_eligible = models.BooleanField(
        default=False,
        help_text=_("Returning guest, entitled to the loyalty discount."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Account")
        verbose_name_plural = _("Accounts")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @property
    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN
