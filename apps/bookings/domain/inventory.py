"""
Room Inventory Aggregate

The consistency boundary that prevents double bookings: every admission
checks the requested stay against the room's inventory before a booking
is written.

Strategy (Defense in Depth):
1. Domain validation: can_allocate() checks for conflicts
2. Per-room admission lock held across check and insert
3. Pessimistic locking: SELECT FOR UPDATE on the room row in the transaction
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID, uuid4

from shared.domain.base import Aggregate
from shared.domain.exceptions import Conflict
from shared.domain.value_objects import DateRange


@dataclass
class Allocation:
    """
    Dates held by a draft or confirmed booking

    Cancelled and completed bookings release their dates and are never
    part of an inventory.
    """
    id: UUID = field(default_factory=uuid4)
    booking_id: UUID | None = None
    booking_code: str = ''
    dates: DateRange | None = None

    def __post_init__(self):
        if not self.dates:
            raise ValueError("Allocation must have dates")


@dataclass(kw_only=True, eq=False)
class RoomInventory(Aggregate):
    """
    Inventory Aggregate Root

    Key invariant: no two allocations of the same room conflict, where
    conflict uses inclusive boundaries (see DateRange.conflicts_with).

    Usage:
        inventory = booking_repo.get_inventory(room_id, lock=True)
        if inventory.can_allocate(dates):
            inventory.allocate(booking.id, dates)
            booking_repo.add(booking)
    """
    room_id: int
    allocations: List[Allocation] = field(default_factory=list)

    def can_allocate(self, dates: DateRange) -> bool:
        """True if no allocation conflicts with dates"""
        return not self.get_allocations_for_period(dates)

    def allocate(self, booking_id: UUID, dates: DateRange, booking_code: str = '') -> Allocation:
        """
        Reserve dates for a booking

        Raises:
            Conflict: the dates conflict with an existing allocation
        """
        overlapping = self.get_allocations_for_period(dates)
        if overlapping:
            raise Conflict(
                f"Room is not available for the selected dates {dates}. "
                f"Found {len(overlapping)} overlapping booking(s)."
            )

        allocation = Allocation(
            id=uuid4(),
            booking_id=booking_id,
            booking_code=booking_code,
            dates=dates,
        )
        self.allocations.append(allocation)
        return allocation

    def get_allocations_for_period(self, dates: DateRange) -> List[Allocation]:
        """All allocations that conflict with the given period"""
        return [
            a for a in self.allocations
            if a.dates.conflicts_with(dates)
        ]

    def __str__(self):
        return f"RoomInventory(room={self.room_id}, allocations={len(self.allocations)})"
