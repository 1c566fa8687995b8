"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public profile of an account. The password hash is never exposed."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "created_at"]
        read_only_fields = fields


class UserContactSerializer(serializers.ModelSerializer):
    """Booker details shown to property owners: name and email only."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = fields
