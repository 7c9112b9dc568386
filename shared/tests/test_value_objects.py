from datetime import date, datetime
from decimal import Decimal

import pytest

from shared.domain.value_objects import DateRange, Money


def test_stay_ending_on_another_stays_check_in_day_conflicts():
    first = DateRange(date(2025, 3, 25), date(2025, 3, 28))

    assert first.conflicts_with(DateRange(date(2025, 3, 27), date(2025, 3, 30)))
    assert first.conflicts_with(DateRange(date(2025, 3, 28), date(2025, 3, 31)))
    assert first.conflicts_with(DateRange(date(2025, 3, 20), date(2025, 3, 25)))
    assert not first.conflicts_with(DateRange(date(2025, 3, 29), date(2025, 3, 31)))
    assert not first.conflicts_with(DateRange(date(2025, 3, 20), date(2025, 3, 24)))


def test_enclosing_stay_conflicts_both_ways():
    outer = DateRange(date(2025, 3, 1), date(2025, 3, 31))
    inner = DateRange(date(2025, 3, 10), date(2025, 3, 12))

    assert outer.conflicts_with(inner)
    assert inner.conflicts_with(outer)


def test_check_out_must_be_after_check_in():
    with pytest.raises(ValueError):
        DateRange(date(2025, 3, 5), date(2025, 3, 5))
    with pytest.raises(ValueError):
        DateRange(date(2025, 3, 6), date(2025, 3, 5))


def test_dates_and_datetimes_cannot_be_mixed():
    with pytest.raises(ValueError):
        DateRange(date(2025, 3, 5), datetime(2025, 3, 6, 12, 0))


def test_partial_days_are_rounded_up():
    assert DateRange(date(2025, 1, 1), date(2025, 1, 4)).duration_days == 3
    assert DateRange(datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 2, 12, 0)).duration_days == 2
    assert len(DateRange(datetime(2025, 1, 1, 14, 0), datetime(2025, 1, 2, 11, 0))) == 1


def test_money_rounds_half_up_to_paise():
    assert Money(Decimal("16.665")).quantize().amount == Decimal("16.67")
    assert Money(Decimal("16.664")).quantize().amount == Decimal("16.66")


def test_money_rejects_negative_amounts_and_mixed_currencies():
    with pytest.raises(ValueError):
        Money(Decimal("-1"))
    with pytest.raises(ValueError):
        Money(Decimal("1"), "INR") + Money(Decimal("1"), "USD")
    with pytest.raises(ValueError):
        Money(Decimal("1")) - Money(Decimal("2"))


def test_money_arithmetic():
    total = Money(Decimal("3500")) * 3

    assert total == Money(Decimal("10500"))
    assert total - Money(Decimal("500")) == Money(Decimal("10000"))
    assert str(Money(Decimal("10500"))) == "10,500.00 INR"
