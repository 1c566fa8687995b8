"""Serializers for the properties domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Property


class PropertySerializer(serializers.ModelSerializer):
    owner = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "title",
            "description",
            "location",
            "price_per_night",
            "bedrooms",
            "bathrooms",
            "guests",
            "image_url",
            "owner",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """Input for create/update; persisting is left to the catalog service."""

    image = serializers.ImageField(write_only=True, required=False)
    image_url = serializers.URLField(max_length=500, required=False)

    class Meta:
        model = Property
        fields = [
            "title",
            "description",
            "location",
            "price_per_night",
            "bedrooms",
            "bathrooms",
            "guests",
            "image_url",
            "image",
        ]
