"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "location",
        "price_per_night",
        "guests",
        "bedrooms",
        "owner",
        "created_at",
    )
    list_filter = ("bedrooms", "guests")
    search_fields = ("title", "location", "owner__email")
    raw_id_fields = ("owner",)
    readonly_fields = ("image_handle", "created_at", "updated_at")
