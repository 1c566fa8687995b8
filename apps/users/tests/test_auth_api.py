"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.credentials import credentials
from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "name": "  Guest User ",
            "email": "Guest@Example.com",
            "password": "secret1",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], "guest@example.com")
        self.assertEqual(response.data["user"]["name"], "Guest User")
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.USER)
        self.assertNotIn("password", response.data["user"])

        user = User.objects.get(email="guest@example.com")
        self.assertNotEqual(user.password, payload["password"])
        self.assertTrue(user.check_password(payload["password"]))
        self.assertTrue(credentials.verify(payload["password"], user.password))
        self.assertEqual(str(credentials.verify_token(response.data["tokens"]["access"])), str(user.pk))

    def test_register_ignores_requested_role(self) -> None:
        payload = {"name": "Sneaky", "email": "sneaky@example.com", "password": "secret1", "role": "admin"}

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.get(email="sneaky@example.com").role, User.RoleChoices.USER)

    def test_register_rejects_duplicate_email_in_any_case(self) -> None:
        User.objects.create_user(email="taken@example.com", password="secret1", name="First")

        payload = {"name": "Second", "email": "TAKEN@example.com", "password": "secret1"}
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)
        self.assertEqual(User.objects.filter(email__iexact="taken@example.com").count(), 1)

    def test_register_rejects_short_password_and_bad_email(self) -> None:
        payload = {"name": "Shorty", "email": "not-an-email", "password": "12345"}

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)
        self.assertIn("password", response.data)
        self.assertFalse(User.objects.exists())

    def test_login_returns_tokens(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1", name="Login")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "LOGIN@example.com", "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["email"], "login@example.com")
        self.assertIn("access", response.data["tokens"])

    def test_login_with_wrong_password_is_unauthorized(self) -> None:
        User.objects.create_user(email="login@example.com", password="CorrectPassword1", name="Login")

        url = reverse("auth:login")
        wrong = self.client.post(url, {"email": "login@example.com", "password": "wrong"}, format="json")
        unknown = self.client.post(url, {"email": "nobody@example.com", "password": "wrong"}, format="json")

        self.assertEqual(wrong.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(unknown.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(wrong.data, unknown.data)

    def test_profile_requires_token(self) -> None:
        response = self.client.get(reverse("auth:profile"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_with_bearer_token(self) -> None:
        self.client.post(
            reverse("auth:register"),
            {"name": "Bearer", "email": "bearer@example.com", "password": "secret1"},
            format="json",
        )
        login = self.client.post(
            reverse("auth:login"),
            {"email": "bearer@example.com", "password": "secret1"},
            format="json",
        )

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['tokens']['access']}")
        response = self.client.get(reverse("auth:profile"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["email"], "bearer@example.com")

    def test_refresh_issues_new_access_token(self) -> None:
        register = self.client.post(
            reverse("auth:register"),
            {"name": "Refresh", "email": "refresh@example.com", "password": "secret1"},
            format="json",
        )

        response = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": register.data["tokens"]["refresh"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)
