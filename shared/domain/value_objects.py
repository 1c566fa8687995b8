"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a stay (check-in to check-out) at day granularity
- parse_identifier: Validates entity identifiers taken from requests
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from django.utils import timezone  # type: ignore

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidIdentifier

# Largest value a BigAutoField primary key can hold
MAX_IDENTIFIER = 2**63 - 1


def to_day(value) -> date:
    """Truncate a date or datetime to its calendar day.

    Time-of-day is not significant for stays, so ``2025-06-01T18:30`` and
    ``2025-06-01`` name the same day. Aware datetimes are read in the
    server time zone first.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localdate(value)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    @classmethod
    def of(cls, start, end) -> 'DateRange':
        """Build a range from dates or datetimes, truncating both to days."""
        return cls(to_day(start), to_day(end))

    def overlap_lookups(self, start_field: str, end_field: str) -> dict:
        """
        ORM lookups selecting stored ranges that overlap this one.

        Half-open ranges [a1, a2) and [b1, b2) overlap iff a1 < b2 and
        b1 < a2, so adjacent stays do not overlap. With the stored range on
        the left: ``stored.start < self.end and self.start < stored.end``.
        """
        return {
            f"{start_field}__lt": self.end_date,
            f"{end_field}__gt": self.start_date,
        }

    def contains(self, check_date: date) -> bool:
        """Start date is inclusive, end date is exclusive."""
        return self.start_date <= check_date < self.end_date

    @property
    def nights(self) -> int:
        """Number of nights, i.e. whole days between the two dates."""
        return (self.end_date - self.start_date).days

    def price_for(self, nightly_rate: Decimal) -> Decimal:
        """Total stay price at a flat nightly rate."""
        return Decimal(self.nights) * Decimal(nightly_rate)

    def __len__(self) -> int:
        return self.nights

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


def parse_identifier(value) -> int:
    """Turn a path or body identifier into a positive integer primary key."""
    if isinstance(value, bool):
        raise InvalidIdentifier()
    try:
        identity = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise InvalidIdentifier() from exc
    if not 1 <= identity <= MAX_IDENTIFIER:
        raise InvalidIdentifier()
    return identity
