"""Room catalog: admin-managed room definitions and rates."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from django.db import transaction  # type: ignore

from apps.bookings.repositories import DjangoBookingRepository
from apps.bookings.services import active_bookings_for_room, room_admission_lock
from apps.users.principal import Principal
from shared.domain.exceptions import Conflict, Forbidden, InvalidInput, NotFound

from .models import Room
from .serializers import RoomSerializer

logger = logging.getLogger(__name__)


def _require_admin(principal: Principal, action: str) -> None:
    if not principal.is_admin:
        raise Forbidden(f"Only administrators can {action}")


class RoomCatalog:
    """Reads are public, every write requires an admin principal."""

    def get_room(self, room_id: int) -> Room:
        try:
            return Room.objects.get(pk=room_id)
        except (Room.DoesNotExist, ValueError):
            raise NotFound(f"Room not found with id of {room_id}")

    def list_rooms(self) -> List[Room]:
        return list(Room.objects.all())

    def create_room(self, data: Mapping[str, Any], principal: Principal) -> Room:
        _require_admin(principal, "create rooms")
        serializer = RoomSerializer(data=data)
        if not serializer.is_valid():
            raise InvalidInput("Invalid room data", errors=serializer.errors)
        room = serializer.save()
        logger.info(f"Room {room.pk} '{room.name}' created")
        return room

    def update_room(self, room_id: int, patch: Mapping[str, Any], principal: Principal) -> Room:
        _require_admin(principal, "edit rooms")
        room = self.get_room(room_id)
        serializer = RoomSerializer(room, data=patch, partial=True)
        if not serializer.is_valid():
            raise InvalidInput("Invalid room data", errors=serializer.errors)
        room = serializer.save()
        logger.info(f"Room {room.pk} updated: {sorted(serializer.validated_data)}")
        return room

    def delete_room(self, room_id: int, principal: Principal) -> None:
        """Remove a room that has no draft or confirmed bookings.

        Takes the same per-room lock and room row lock as admission, so a
        booking cannot land between the check and the delete.
        """
        _require_admin(principal, "delete rooms")
        with room_admission_lock(room_id), transaction.atomic():
            room = DjangoBookingRepository().get_room(room_id, lock=True)
            if active_bookings_for_room(room.pk):
                raise Conflict(
                    "Cannot delete room with active bookings. Please cancel all bookings first."
                )
            room.delete()
        logger.info(f"Room {room_id} deleted")
