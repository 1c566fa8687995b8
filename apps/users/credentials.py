"""Credential service: password hashing and bearer token handling.

Passwords go through Django's configured password hashers; tokens are
JWTs issued and verified by djangorestframework-simplejwt. Both run
in-process, so none of these calls can block on the network.
"""

from __future__ import annotations

from django.contrib.auth.hashers import check_password, make_password  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError  # type: ignore
from rest_framework_simplejwt.settings import api_settings as jwt_settings  # type: ignore
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken  # type: ignore


class CredentialService:
    def hash(self, secret: str) -> str:
        return make_password(secret)

    def verify(self, secret: str, hashed: str) -> bool:
        return bool(hashed) and check_password(secret, hashed)

    def issue_token(self, user) -> dict[str, str]:
        refresh = RefreshToken.for_user(user)
        return {"refresh": str(refresh), "access": str(refresh.access_token)}

    def verify_token(self, token: str):
        """Return the user id carried by an access token.

        API requests are authenticated by simplejwt's ``JWTAuthentication``;
        this is the same check for callers outside the DRF request cycle.

        Raises ``InvalidToken`` (401) for expired, tampered or refresh tokens.
        """
        try:
            access = AccessToken(token)
        except TokenError as exc:
            raise InvalidToken(str(exc)) from exc
        return access[jwt_settings.USER_ID_CLAIM]


credentials = CredentialService()
