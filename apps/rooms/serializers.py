"""Serializers for the room catalog."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    """Validates admin input for creating and editing rooms."""

    images = serializers.ListField(
        child=serializers.CharField(max_length=500),
        allow_empty=False,
        error_messages={"empty": "Please add at least one image URL"},
    )
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=100),
        allow_empty=False,
        error_messages={"empty": "Please add room amenities"},
    )

    class Meta:
        model = Room
        fields = [
            "id",
            "name",
            "description",
            "room_type",
            "price_per_day",
            "price_per_week",
            "price_per_month",
            "capacity",
            "images",
            "amenities",
            "is_available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "capacity": {"min_value": 1},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Please add a room name")
        return value
