"""Room inventory models for Shangarh Stays."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.pricing import RoomRates


class Room(models.Model):
    """A bookable room with its daily, weekly and monthly rates."""

    class RoomType(models.TextChoices):
        STANDARD = "standard", _("Standard")
        DELUXE = "deluxe", _("Deluxe")
        SUITE = "suite", _("Suite")
        FAMILY = "family", _("Family")

    name = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    room_type = models.CharField(max_length=20, choices=RoomType.choices)
    price_per_day = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    price_per_week = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    price_per_month = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    capacity = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    images = models.JSONField(default=list, help_text=_("Image URLs, at least one."))
    amenities = models.JSONField(default=list)
    is_available = models.BooleanField(
        default=True,
        help_text=_("Switched off by an admin to stop new bookings."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="room_capacity_at_least_one",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_room_type_display()})"

    @property
    def rates(self) -> RoomRates:
        return RoomRates(
            per_day=self.price_per_day,
            per_week=self.price_per_week,
            per_month=self.price_per_month,
        )

    @property
    def main_image(self) -> str | None:
        return self.images[0] if self.images else None
