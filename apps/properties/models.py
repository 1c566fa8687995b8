"""Property domain models for the Holiday Rentals API.

A property is a rentable unit with a flat nightly price and a guest
capacity. It may belong to an owner; properties without one predate
ownership and can only be changed by an administrator.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinLengthValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def default_image_url() -> str:
    return settings.RENTALS["PLACEHOLDER_IMAGE_URL"]


class Property(models.Model):
    """Vacation rental listed in the catalog."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="properties",
    )
    title = models.CharField(max_length=100)
    description = models.TextField(validators=[MinLengthValidator(20)])
    location = models.CharField(max_length=255)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    bedrooms = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    bathrooms = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    guests = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Maximum number of guests."),
    )
    image_url = models.CharField(max_length=500, default=default_image_url)
    image_handle = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("Media store handle of an uploaded image."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("property")
        verbose_name_plural = _("properties")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_night__gt=0),
                name="property_positive_price",
            ),
        ]
        indexes = [
            models.Index(fields=["owner"], name="property_owner_idx"),
            models.Index(fields=["price_per_night"], name="property_price_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def save(self, *args, **kwargs):  # type: ignore
        self.title = (self.title or "").strip()
        self.location = (self.location or "").strip()
        super().save(*args, **kwargs)
