"""Availability engine: does a stay collide with an active booking?

Only pending and confirmed bookings occupy a property. Stays are half-open
``[check_in, check_out)`` ranges, so a stay may start on the day another
one ends. The overlap test itself lives in
:meth:`shared.domain.value_objects.DateRange.overlap_lookups`.
"""

from __future__ import annotations

from datetime import date
from typing import List, Tuple

from shared.domain.exceptions import Conflict
from shared.domain.value_objects import DateRange

from .models import Booking


def _overlapping(property_id, stay: DateRange):
    return Booking.objects.filter(
        property_id=property_id,
        status__in=Booking.ACTIVE_STATUSES,
        **stay.overlap_lookups("check_in_date", "check_out_date"),
    )


def is_available(property_id, check_in, check_out) -> bool:
    """True when no active booking of the property overlaps the stay."""
    stay = DateRange.of(check_in, check_out)
    return not _overlapping(property_id, stay).exists()


def ensure_available(property_obj, check_in, check_out) -> None:
    """Raise ``Conflict`` when the stay collides with an active booking."""
    if not is_available(property_obj.pk, check_in, check_out):
        raise Conflict()


def occupied_ranges(property_id) -> List[Tuple[date, date]]:
    """Active stays of the property as ``(start, end)`` pairs, earliest first."""
    rows = (
        Booking.objects.filter(property_id=property_id, status__in=Booking.ACTIVE_STATUSES)
        .order_by("check_in_date", "check_out_date")
        .values_list("check_in_date", "check_out_date")
    )
    return [(start, end) for start, end in rows]
