"""Domain services for booking workflows.

:class:`BookingService` is the only code that creates bookings or changes
their status. Creating a booking is a check-then-insert, so it runs while
holding a per-property lock: an in-process :class:`KeyedLock` and, on
databases that support it, a row lock on the property.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from django.conf import settings  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.properties.models import Property
from apps.users import access_policy
from shared.domain.exceptions import (
    CapacityExceeded,
    Forbidden,
    InvalidRange,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    PastDate,
    ServerError,
    ValidationError,
)
from shared.domain.value_objects import DateRange, parse_identifier
from shared.infrastructure.locks import KeyedLock, LockTimeout

from .availability import ensure_available
from .models import Booking

logger = logging.getLogger(__name__)

# Shared by every BookingService in the process.
property_locks = KeyedLock()


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _get_property(property_id) -> Property:
    pk = parse_identifier(property_id)
    try:
        return Property.objects.get(pk=pk)
    except Property.DoesNotExist as exc:
        raise NotFound("Property not found.") from exc


class BookingService:
    def __init__(
        self,
        *,
        lock_timeout: float = 5.0,
        locks: KeyedLock | None = None,
        today: Callable[[], date] = timezone.localdate,
    ):
        self.lock_timeout = lock_timeout
        self.locks = locks if locks is not None else property_locks
        self.today = today

    @classmethod
    def from_settings(cls) -> "BookingService":
        return cls(lock_timeout=settings.RENTALS["BOOKING_LOCK_TIMEOUT"])

    # Lifecycle

    def create_booking(self, property_id, user, check_in, check_out, guests: int) -> Booking:
        """Validate, price and store a pending booking.

        Raises InvalidRange, PastDate, InvalidIdentifier, NotFound,
        CapacityExceeded or Conflict; nothing is written in those cases.
        """
        try:
            stay = DateRange.of(check_in, check_out)
        except ValueError as exc:
            raise InvalidRange() from exc

        if stay.start_date < self.today():
            raise PastDate()

        if guests < 1:
            raise ValidationError(errors={"guests": ["At least one guest is required."]})

        property_obj = _get_property(property_id)
        if guests > property_obj.guests:
            raise CapacityExceeded(
                f"This property accommodates at most {property_obj.guests} guests.",
                errors={"guests": [f"Must be at most {property_obj.guests}."]},
            )

        try:
            with self.locks.hold(property_obj.pk, timeout=self.lock_timeout):
                with transaction.atomic():
                    locked = _lock_queryset_if_possible(Property.objects.filter(pk=property_obj.pk)).first()
                    if locked is None:
                        raise NotFound("Property not found.")
                    ensure_available(locked, stay.start_date, stay.end_date)
                    booking = Booking.objects.create(
                        property=locked,
                        user=user,
                        check_in_date=stay.start_date,
                        check_out_date=stay.end_date,
                        guests=guests,
                        total_price=stay.price_for(locked.price_per_night),
                        status=Booking.Status.PENDING,
                    )
        except LockTimeout as exc:
            logger.error(f"Timed out waiting for booking lock on property {property_obj.pk}")
            raise ServerError("Bookings for this property are busy, please retry.") from exc
        except DatabaseError as exc:
            raise ServerError("Could not save booking.") from exc

        logger.info(
            f"Booking {booking.pk} created for property {property_obj.pk} "
            f"by user {user.pk}: {stay}, {stay.nights} nights, total {booking.total_price}"
        )
        return booking

    def cancel_booking(self, booking_id, requester) -> Booking:
        with transaction.atomic():
            booking = self._get_for_update(booking_id)
            if not access_policy.can_mutate(requester, booking):
                raise Forbidden("You cannot cancel this booking.")
            if booking.status == Booking.Status.CANCELLED:
                raise InvalidTransition("Booking is already cancelled.")
            booking.transition_to(Booking.Status.CANCELLED)
            booking.save(update_fields=["status", "cancelled_at", "updated_at"])

        logger.info(f"Booking {booking.pk} cancelled by user {requester.pk}")
        return booking

    def set_status(self, booking_id, requester, new_status) -> Booking:
        with transaction.atomic():
            booking = self._get_for_update(booking_id)
            if not access_policy.can_manage_booking(requester, booking):
                raise Forbidden("Only the property owner or an administrator can change the status.")
            if new_status not in Booking.Status.values:
                raise InvalidStatus(f"Unknown booking status: {new_status!r}.")
            previous = booking.status
            booking.transition_to(new_status)
            booking.save(update_fields=["status", "cancelled_at", "updated_at"])

        logger.info(f"Booking {booking.pk} status {previous} -> {new_status} by user {requester.pk}")
        return booking

    # Queries

    def get_booking(self, booking_id, requester) -> Booking:
        pk = parse_identifier(booking_id)
        try:
            booking = Booking.objects.select_related("property", "user").get(pk=pk)
        except Booking.DoesNotExist as exc:
            raise NotFound("Booking not found.") from exc
        if not access_policy.can_view(requester, booking):
            raise Forbidden("You cannot view this booking.")
        return booking

    def list_for_user(self, user):
        return Booking.objects.filter(user=user).select_related("property").order_by("-created_at", "-id")

    def list_for_property(self, property_id, requester):
        property_obj = _get_property(property_id)
        if not access_policy.can_list_property_bookings(requester, property_obj):
            raise Forbidden("Only the property owner or an administrator can list its bookings.")
        return (
            Booking.objects.filter(property=property_obj)
            .select_related("property", "user")
            .order_by("-created_at", "-id")
        )

    # Helpers

    @staticmethod
    def _get_for_update(booking_id) -> Booking:
        pk = parse_identifier(booking_id)
        booking = _lock_queryset_if_possible(Booking.objects.filter(pk=pk)).first()
        if booking is None:
            raise NotFound("Booking not found.")
        return booking
