"""Tests for the pure pricing calculation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from apps.bookings.domain.pricing import BookingType, RoomRates, billed_units, calculate_price
from shared.domain.exceptions import InvalidInput
from shared.domain.value_objects import DateRange, Money

RATES = RoomRates(
    per_day=Decimal("3500.00"),
    per_week=Decimal("21000.00"),
    per_month=Decimal("80000.00"),
)


def stay(days: int) -> DateRange:
    start = date(2025, 1, 1)
    return DateRange(start, date.fromordinal(start.toordinal() + days))


@pytest.mark.parametrize(
    "booking_type, days, expected_total, expected_units",
    [
        ("daily", 3, Decimal("10500"), 3),
        ("weekly", 10, Decimal("42000"), 2),
        ("weekly", 7, Decimal("21000"), 1),
        ("monthly", 40, Decimal("160000"), 2),
        ("monthly", 30, Decimal("80000"), 1),
    ],
)
def test_total_by_booking_type(booking_type, days, expected_total, expected_units):
    quote = calculate_price(RATES, stay(days), booking_type)

    assert quote.total == Money(expected_total)
    assert quote.billed_units == expected_units
    assert quote.duration_days == days
    assert quote.discount == Money.zero()
    assert quote.final == quote.total


def test_eligible_guest_gets_five_percent_off():
    rates = RoomRates(per_day=Decimal("10000"), per_week=Decimal("0"), per_month=Decimal("0"))

    quote = calculate_price(
        rates, stay(1), BookingType.DAILY, discount_eligible=True, discount_rate=Decimal("0.05")
    )

    assert quote.total.amount == Decimal("10000")
    assert quote.discount.amount == Decimal("500")
    assert quote.final.amount == Decimal("9500")


def test_rate_is_ignored_when_not_eligible():
    quote = calculate_price(RATES, stay(3), "daily", discount_eligible=False, discount_rate=Decimal("0.05"))

    assert quote.discount.amount == Decimal("0")
    assert quote.final.amount == Decimal("10500")


def test_discount_is_rounded_half_up_to_two_places():
    rates = RoomRates(per_day=Decimal("333.33"), per_week=Decimal("0"), per_month=Decimal("0"))

    quote = calculate_price(rates, stay(1), "daily", discount_eligible=True, discount_rate=Decimal("0.05"))

    assert quote.discount.amount == Decimal("16.67")
    assert quote.final.amount == Decimal("316.66")


def test_partial_day_is_billed_as_a_full_day():
    dates = DateRange(datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 2, 12, 0))

    quote = calculate_price(RATES, dates, "daily")

    assert quote.duration_days == 2
    assert quote.total.amount == Decimal("7000")


def test_unknown_booking_type_is_invalid_input():
    with pytest.raises(InvalidInput):
        calculate_price(RATES, stay(3), "hourly")


def test_billed_units_rounds_up_partial_periods():
    assert billed_units(1, BookingType.WEEKLY) == 1
    assert billed_units(8, BookingType.WEEKLY) == 2
    assert billed_units(31, BookingType.MONTHLY) == 2
