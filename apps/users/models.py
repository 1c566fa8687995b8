"""User domain models for the Holiday Rentals API.

The platform knows two roles: regular users, who book stays, and
administrators, who manage the catalog. Email is the login: it is unique,
stored lower-case and matched case-insensitively.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """User manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email address is required to create a user.")
        email = self.normalize_email(email)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @classmethod
    def normalize_email(cls, email: str | None) -> str:
        """Whole-address lower-casing, so lookups never depend on case."""
        return (email or "").strip().lower()

    def get_by_natural_key(self, username):  # type: ignore
        return self.get(**{f"{self.model.USERNAME_FIELD}__iexact": username})


class CustomUser(AbstractUser):
    """Platform account with a role."""

    class RoleChoices(models.TextChoices):
        USER = "user", _("User")
        ADMIN = "admin", _("Admin")

    username = models.CharField(
        _("username"),
        max_length=150,
        blank=True,
        help_text=_("Unused; email is the login."),
    )
    name = models.CharField(_("name"), max_length=150)
    email = models.EmailField(_("email"), unique=True)
    role = models.CharField(
        _("role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.USER,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def save(self, *args, **kwargs):  # type: ignore
        self.email = CustomUserManager.normalize_email(self.email)
        self.name = (self.name or "").strip()
        super().save(*args, **kwargs)

    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_superuser


# Short alias used across the apps and tests
User = CustomUser
