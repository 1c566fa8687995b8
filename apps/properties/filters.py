"""FilterSet definitions for the property listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """FilterSet for Property with the filters offered by the listing."""

    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    price_min = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="lte")
    # Minimum capacity: properties that sleep at least this many guests
    guests = django_filters.NumberFilter(field_name="guests", lookup_expr="gte")
    bedrooms_min = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")

    class Meta:
        model = Property
        fields = ["location"]
