"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore

from .credentials import credentials

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, trim_whitespace=True)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)

    def validate_email(self, value: str) -> str:
        email = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        # New accounts always get the default role.
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.password = credentials.hash(password)
        user.save()
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = User.objects.filter(email__iexact=attrs["email"].strip()).first()
        if user is None or not user.is_active or not credentials.verify(attrs["password"], user.password):
            raise exceptions.AuthenticationFailed("Invalid email or password.")
        attrs["user"] = user
        return attrs
