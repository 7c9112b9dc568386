"""Input validation for booking requests."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class GuestDetailsSerializer(serializers.Serializer):
    """Contact details a guest leaves with the booking."""

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    id_proof = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")


class BookingRequestSerializer(serializers.Serializer):
    """Shape of an admission request before any storage is touched."""

    room_id = serializers.IntegerField(min_value=1)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    booking_type = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    guest_details = GuestDetailsSerializer()
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")
    prior_guest_id = serializers.UUIDField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError(
                {"check_out": "Check-out date must be after check-in date"}
            )
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)
