"""
Booking Pricing

Pure calculation of what a stay costs. No I/O, no settings lookups:
everything the calculation depends on is passed in, so the same inputs
always give the same quote.

    daily    total = rate_per_day   * days
    weekly   total = rate_per_week  * ceil(days / 7)
    monthly  total = rate_per_month * ceil(days / 30)

where days is the stay length with partial days rounded up. The
returning guest discount is a fraction of the total rounded to the
currency's minor unit.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInput
from shared.domain.value_objects import DateRange, Money

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30


class BookingType(Enum):
    """Which room rate a booking is billed at"""
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'

    @classmethod
    def parse(cls, value) -> 'BookingType':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            expected = ', '.join(t.value for t in cls)
            raise InvalidInput(
                f"Invalid booking type '{value}'. Expected one of: {expected}",
                errors={'booking_type': [f"Expected one of: {expected}"]},
            )


@dataclass(frozen=True)
class RoomRates(ValueObject):
    """The three rates a room is offered at"""
    per_day: Decimal
    per_week: Decimal
    per_month: Decimal


@dataclass(frozen=True)
class PriceQuote(ValueObject):
    """
    Result of pricing a stay

    total is before discount, final = total - discount.
    billed_units is the number of days, weeks or months charged.
    """
    total: Money
    discount: Money
    final: Money
    duration_days: int
    billed_units: int


def billed_units(duration_days: int, booking_type: BookingType) -> int:
    """Number of rate periods charged for a stay of duration_days"""
    if booking_type is BookingType.DAILY:
        return duration_days
    if booking_type is BookingType.WEEKLY:
        return math.ceil(duration_days / DAYS_PER_WEEK)
    if booking_type is BookingType.MONTHLY:
        return math.ceil(duration_days / DAYS_PER_MONTH)
    raise InvalidInput(f"Invalid booking type '{booking_type}'")


def calculate_price(
    rates: RoomRates,
    dates: DateRange,
    booking_type,
    *,
    discount_eligible: bool = False,
    discount_rate: Decimal = Decimal('0'),
    currency: str = 'INR',
) -> PriceQuote:
    """
    Price a stay

    Args:
        rates: The room's per-day/week/month rates
        dates: Stay period
        booking_type: BookingType or its string value
        discount_eligible: Whether the returning guest discount applies
        discount_rate: Fraction of the total taken off when eligible (e.g. 0.05)
        currency: Currency of the rates

    Raises:
        InvalidInput: unknown booking type
    """
    booking_type = BookingType.parse(booking_type)

    rate = {
        BookingType.DAILY: rates.per_day,
        BookingType.WEEKLY: rates.per_week,
        BookingType.MONTHLY: rates.per_month,
    }[booking_type]

    days = dates.duration_days
    units = billed_units(days, booking_type)
    total = (Money(rate, currency) * units).quantize()

    if discount_eligible:
        discount = (total * Decimal(str(discount_rate))).quantize()
    else:
        discount = Money.zero(currency)

    return PriceQuote(
        total=total,
        discount=discount,
        final=total - discount,
        duration_days=days,
        billed_units=units,
    )
