"""Tests for the booking lifecycle service."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

from django.test import TestCase, override_settings

from apps.bookings.models import Booking
from apps.bookings.serializers import DayField
from apps.bookings.services import BookingService
from apps.properties.models import Property
from apps.users.models import User
from shared.domain.exceptions import (
    CapacityExceeded,
    Conflict,
    InvalidRange,
    InvalidTransition,
    PastDate,
    ServerError,
)
from shared.infrastructure.locks import KeyedLock, LockTimeout


class BookingServiceTests(TestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass1", name="Guest")
        self.owner = User.objects.create_user(email="owner@example.com", password="OwnerPass1", name="Owner")
        self.property = Property.objects.create(
            owner=self.owner,
            title="Beach house",
            description="Bright house right on the seafront.",
            location="Cadiz",
            price_per_night=Decimal("100.00"),
            bedrooms=2,
            bathrooms=1,
            guests=2,
        )
        self.service = BookingService(today=lambda: date(2025, 5, 1), locks=KeyedLock())

    def test_total_price_is_nights_times_rate(self) -> None:
        booking = self.service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 4), 2)

        self.assertEqual(booking.total_price, Decimal("300.00"))
        self.assertEqual(booking.stay().nights, 3)
        self.assertEqual(booking.status, Booking.Status.PENDING)

    def test_datetimes_are_truncated_before_pricing(self) -> None:
        booking = self.service.create_booking(
            str(self.property.id),
            self.guest,
            datetime(2025, 6, 1, 18, 30),
            datetime(2025, 6, 3, 9, 0),
            1,
        )

        self.assertEqual((booking.check_in_date, booking.check_out_date), (date(2025, 6, 1), date(2025, 6, 3)))
        self.assertEqual(booking.total_price, Decimal("200.00"))

    @override_settings(TIME_ZONE="UTC")
    def test_aware_datetimes_match_api_day(self) -> None:
        offset = dt_timezone(timedelta(hours=-5))
        check_in = datetime(2025, 6, 1, 22, 0, tzinfo=offset)
        check_out = datetime(2025, 6, 3, 22, 0, tzinfo=offset)

        booking = self.service.create_booking(self.property.id, self.guest, check_in, check_out, 1)

        self.assertEqual(booking.check_in_date, DayField().to_internal_value(check_in.isoformat()))
        self.assertEqual((booking.check_in_date, booking.check_out_date), (date(2025, 6, 2), date(2025, 6, 4)))

    def test_validation_order(self) -> None:
        with self.assertRaises(InvalidRange):
            self.service.create_booking(self.property.id, self.guest, date(2025, 6, 4), date(2025, 6, 1), 9)
        with self.assertRaises(PastDate):
            self.service.create_booking(self.property.id, self.guest, date(2025, 4, 30), date(2025, 5, 2), 9)
        with self.assertRaises(CapacityExceeded):
            self.service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 2), 3)
        self.assertFalse(Booking.objects.exists())

    def test_check_in_today_is_allowed(self) -> None:
        booking = self.service.create_booking(self.property.id, self.guest, date(2025, 5, 1), date(2025, 5, 2), 1)

        self.assertEqual(booking.check_in_date, date(2025, 5, 1))

    def test_overlap_is_conflict(self) -> None:
        self.service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 4), 2)

        with self.assertRaises(Conflict):
            self.service.create_booking(self.property.id, self.guest, date(2025, 6, 3), date(2025, 6, 5), 2)

    def test_lock_timeout_is_server_error(self) -> None:
        locks = mock.Mock()
        locks.hold.side_effect = LockTimeout("busy")
        service = BookingService(today=lambda: date(2025, 5, 1), locks=locks, lock_timeout=0.1)

        with self.assertRaises(ServerError):
            service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 2), 1)
        locks.hold.assert_called_once_with(self.property.id, timeout=0.1)
        self.assertFalse(Booking.objects.exists())

    def test_transition_table(self) -> None:
        allowed = {
            ("pending", "confirmed"),
            ("pending", "cancelled"),
            ("pending", "completed"),
            ("confirmed", "cancelled"),
            ("confirmed", "completed"),
        }
        for current in Booking.Status.values:
            for target in Booking.Status.values:
                with self.subTest(current=current, target=target):
                    booking = Booking(status=current)
                    self.assertEqual(booking.can_transition_to(target), (current, target) in allowed)

    def test_set_status_rejects_forbidden_transition(self) -> None:
        booking = self.service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 2), 1)
        self.service.cancel_booking(booking.id, self.guest)

        with self.assertRaises(InvalidTransition):
            self.service.set_status(booking.id, self.owner, Booking.Status.CONFIRMED)

    def test_logs_created_booking(self) -> None:
        with self.assertLogs("apps.bookings.services", level="INFO") as logs:
            booking = self.service.create_booking(self.property.id, self.guest, date(2025, 6, 1), date(2025, 6, 4), 2)

        self.assertIn(f"Booking {booking.id} created", logs.output[0])
