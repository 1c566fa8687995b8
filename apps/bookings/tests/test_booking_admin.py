"""Tests for the booking admin: read-only records and status actions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db.models import ProtectedError
from django.test import TestCase
from django.urls import reverse

from apps.bookings.models import Booking
from apps.properties.models import Property
from apps.users.models import User


class BookingAdminTests(TestCase):
    def setUp(self) -> None:
        self.superuser = User.objects.create_superuser(email="root@example.com", password="RootPass1", name="Root")
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass1", name="Guest")
        property_obj = Property.objects.create(
            title="Harbour flat",
            description="Small flat overlooking the fishing harbour.",
            location="Porto",
            price_per_night=Decimal("70.00"),
            bedrooms=1,
            bathrooms=1,
            guests=2,
        )
        self.booking = Booking.objects.create(
            property=property_obj,
            user=self.guest,
            check_in_date=date(2025, 7, 1),
            check_out_date=date(2025, 7, 3),
            guests=2,
            total_price=Decimal("140.00"),
            status=Booking.Status.PENDING,
        )
        self.client.force_login(self.superuser)
        self.changelist_url = reverse("admin:bookings_booking_changelist")

    def test_change_form_cannot_reopen_terminal_booking(self) -> None:
        self.booking.status = Booking.Status.COMPLETED
        self.booking.save()

        self.client.post(
            reverse("admin:bookings_booking_change", args=[self.booking.pk]),
            {"status": Booking.Status.PENDING, "guests": 1, "_save": "Save"},
        )

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.COMPLETED)
        self.assertEqual(self.booking.guests, 2)

    def test_bookings_cannot_be_deleted_or_added(self) -> None:
        delete = self.client.post(
            reverse("admin:bookings_booking_delete", args=[self.booking.pk]),
            {"post": "yes"},
        )
        add = self.client.get(reverse("admin:bookings_booking_add"))

        self.assertEqual(delete.status_code, 403)
        self.assertEqual(add.status_code, 403)
        self.assertTrue(Booking.objects.filter(pk=self.booking.pk).exists())

    def test_status_action_follows_transition_table(self) -> None:
        response = self.client.post(
            self.changelist_url,
            {"action": "mark_confirmed", "_selected_action": [self.booking.pk]},
        )
        self.assertEqual(response.status_code, 302)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.CONFIRMED)

        self.client.post(
            self.changelist_url,
            {"action": "mark_cancelled", "_selected_action": [self.booking.pk]},
        )
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.CANCELLED)
        self.assertIsNotNone(self.booking.cancelled_at)

    def test_rejected_transition_leaves_booking_unchanged(self) -> None:
        self.booking.status = Booking.Status.COMPLETED
        self.booking.save()

        self.client.post(
            self.changelist_url,
            {"action": "mark_confirmed", "_selected_action": [self.booking.pk]},
        )

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.COMPLETED)

    def test_user_with_bookings_cannot_be_deleted(self) -> None:
        with self.assertRaises(ProtectedError):
            self.guest.delete()

        self.assertTrue(Booking.objects.filter(pk=self.booking.pk).exists())
