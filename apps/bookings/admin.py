"""Admin registration for bookings.

Bookings are read-only here: they are created through the API and their
status only moves through ``BookingService``, so the admin offers status
actions instead of an editable form and never deletes a booking.
"""

from __future__ import annotations

from django.contrib import admin, messages

from shared.domain.exceptions import DomainError

from .models import Booking
from .services import BookingService


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "user",
        "status",
        "check_in_date",
        "check_out_date",
        "guests",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in_date", "check_out_date")
    search_fields = ("property__title", "user__email")
    readonly_fields = (
        "property",
        "user",
        "check_in_date",
        "check_out_date",
        "guests",
        "total_price",
        "status",
        "cancelled_at",
        "created_at",
        "updated_at",
    )
    actions = ("mark_confirmed", "mark_completed", "mark_cancelled")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def _set_status(self, request, queryset, new_status):
        service = BookingService.from_settings()
        changed = 0
        for booking in queryset:
            try:
                service.set_status(booking.pk, request.user, new_status)
            except DomainError as exc:
                self.message_user(request, f"Booking {booking.pk}: {exc.detail}", messages.ERROR)
            else:
                changed += 1
        if changed:
            self.message_user(request, f"{changed} booking(s) marked {new_status}.", messages.SUCCESS)

    @admin.action(description="Mark selected bookings as confirmed")
    def mark_confirmed(self, request, queryset):
        self._set_status(request, queryset, Booking.Status.CONFIRMED)

    @admin.action(description="Mark selected bookings as completed")
    def mark_completed(self, request, queryset):
        self._set_status(request, queryset, Booking.Status.COMPLETED)

    @admin.action(description="Mark selected bookings as cancelled")
    def mark_cancelled(self, request, queryset):
        self._set_status(request, queryset, Booking.Status.CANCELLED)
