"""
Common Value Objects

- Money: monetary amount in the hotel's currency
- DateRange: a stay period (check-in to check-out)
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

# Number of decimal places of the smallest currency unit
MINOR_UNITS = {
    'INR': 2,
    'USD': 2,
    'EUR': 2,
}

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Amounts are Decimals and never negative. Arithmetic is only defined
    between amounts of the same currency.
    """
    amount: Decimal
    currency: str = 'INR'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in MINOR_UNITS:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def zero(cls, currency: str = 'INR') -> 'Money':
        return cls(Decimal('0'), currency)

    def quantize(self) -> 'Money':
        """Round to the currency's minor unit (half up)"""
        exponent = Decimal(1).scaleb(-MINOR_UNITS[self.currency])
        return Money(self.amount.quantize(exponent, rounding=ROUND_HALF_UP), self.currency)

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only subtract Money from Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract different currencies: {self.currency} and {other.currency}")
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor) -> 'Money':
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by an int or Decimal")
        return Money(self.amount * factor, self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Stay period from start_date to end_date

    Both ends may be dates or datetimes, but not a mix of the two.
    end_date must be strictly after start_date.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if isinstance(self.start_date, datetime) != isinstance(self.end_date, datetime):
            raise ValueError("Start and end must both be dates or both be datetimes")
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def conflicts_with(self, other: 'DateRange') -> bool:
        """
        Check if two stays compete for the room

        Boundaries are inclusive: a stay that ends on the day another one
        starts conflicts with it. Same-day turnover is not offered.

        Examples:
            - DateRange(25, 28) vs DateRange(27, 30) -> True
            - DateRange(25, 28) vs DateRange(28, 31) -> True (shared boundary day)
            - DateRange(25, 28) vs DateRange(29, 31) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check conflicts with another DateRange")

        return (self.start_date <= other.end_date and
                self.end_date >= other.start_date)

    @property
    def duration_days(self) -> int:
        """Length in days, partial days rounded up"""
        delta = self.end_date - self.start_date
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)

    def __len__(self) -> int:
        return self.duration_days

    def __str__(self):
        return f"{self.start_date.strftime('%d.%m.%Y')} - {self.end_date.strftime('%d.%m.%Y')}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
