"""Booking domain models for the Holiday Rentals API."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.exceptions import InvalidTransition
from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """Reservation of a property for a range of nights."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    # Statuses that occupy the property's calendar
    ACTIVE_STATUSES = (Status.PENDING, Status.CONFIRMED)

    TRANSITIONS = {
        Status.PENDING: {Status.CONFIRMED, Status.CANCELLED, Status.COMPLETED},
        Status.CONFIRMED: {Status.CANCELLED, Status.COMPLETED},
        Status.CANCELLED: set(),
        Status.COMPLETED: set(),
    }

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    guests = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Nights times the nightly price at booking time."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("booking")
        verbose_name_plural = _("bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gte=0),
                name="booking_non_negative_price",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "check_in_date", "check_out_date"], name="booking_property_dates_idx"),
            models.Index(fields=["user", "created_at"], name="booking_user_created_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for {self.property_id} ({self.check_in_date} - {self.check_out_date})"

    def stay(self) -> DateRange:
        return DateRange(self.check_in_date, self.check_out_date)

    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, set())

    def transition_to(self, new_status: str) -> None:
        """Apply a status change in memory; the caller saves."""
        if not self.can_transition_to(new_status):
            raise InvalidTransition(f"Cannot change booking status from {self.status} to {new_status}.")
        self.status = new_status
        if new_status == self.Status.CANCELLED:
            self.cancelled_at = timezone.now()
