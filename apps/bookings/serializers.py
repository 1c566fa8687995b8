"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import datetime

from django.utils.dateparse import parse_datetime  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertySerializer
from apps.users.serializers import UserContactSerializer
from shared.domain.value_objects import to_day

from .models import Booking


class DayField(serializers.DateField):
    """Date input that also accepts full timestamps and keeps only the day."""

    def to_internal_value(self, value):  # type: ignore
        if isinstance(value, datetime):
            return to_day(value)
        if isinstance(value, str) and ("T" in value or " " in value.strip()):
            try:
                parsed = parse_datetime(value.strip())
            except ValueError:
                parsed = None
            if parsed is not None:
                return to_day(parsed)
        return super().to_internal_value(value)


class BookingCreateSerializer(serializers.Serializer):
    property_id = serializers.CharField()
    check_in_date = DayField()
    check_out_date = DayField()
    guests = serializers.IntegerField(min_value=1)


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    property = PropertySerializer(read_only=True)
    user = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
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
        ]
        read_only_fields = fields


class PropertyBookingSerializer(BookingSerializer):
    """Booking as seen by the property owner: booker contact details included."""

    user = UserContactSerializer(read_only=True)


class OccupiedRangeSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
