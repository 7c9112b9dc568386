"""Shared pytest fixtures for the booking engine tests."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.bookings.application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
)
from apps.rooms.models import Room
from apps.users.models import Account
from apps.users.principal import Principal


@pytest.fixture
def admin_account(db) -> Account:
    return Account.objects.create(
        name="Front Desk",
        email="admin@shangarh.example",
        role=Account.RoleChoices.ADMIN,
    )


@pytest.fixture
def guest_account(db) -> Account:
    return Account.objects.create(name="Asha Verma", email="asha@example.com", phone="+919800000001")


@pytest.fixture
def other_account(db) -> Account:
    return Account.objects.create(name="Ravi Nair", email="ravi@example.com", phone="+919800000002")


@pytest.fixture
def admin(admin_account) -> Principal:
    return Principal.for_account(admin_account)


@pytest.fixture
def guest(guest_account) -> Principal:
    return Principal.for_account(guest_account)


@pytest.fixture
def make_room(db):
    def _make_room(**overrides) -> Room:
        values = {
            "name": "Deodar Suite",
            "description": "Valley facing suite with a wooden balcony.",
            "room_type": Room.RoomType.SUITE,
            "price_per_day": Decimal("3500.00"),
            "price_per_week": Decimal("21000.00"),
            "price_per_month": Decimal("80000.00"),
            "capacity": 2,
            "images": ["https://img.example.com/deodar-1.jpg"],
            "amenities": ["wifi", "heater"],
        }
        values.update(overrides)
        return Room.objects.create(**values)

    return _make_room


@pytest.fixture
def room(make_room) -> Room:
    return make_room()


@pytest.fixture
def guest_details() -> dict:
    return {"name": "Asha Verma", "email": "asha@example.com", "phone": "+919800000001"}


@pytest.fixture
def stay_start() -> date:
    return date.today() + timedelta(days=10)


@pytest.fixture
def book(guest_details):
    """Admit a booking with sensible defaults."""

    def _book(room, check_in, check_out, principal=None, **overrides):
        command = CreateBookingCommand(
            room_id=room.pk,
            check_in=check_in,
            check_out=check_out,
            booking_type=overrides.pop("booking_type", "daily"),
            guest_details=overrides.pop("guest_details", guest_details),
            principal=principal or Principal.anonymous(),
            **overrides,
        )
        return CreateBookingHandler().handle(command)

    return _book
