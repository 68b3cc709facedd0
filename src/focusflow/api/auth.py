"""Authentication endpoints."""

from __future__ import annotations

from focusflow.api.client import APIClient
from focusflow.errors import AuthenticationError


class AuthAPI:
    """Password sign-in against the backend auth service."""

    def __init__(self, client: APIClient):
        self.client = client

    async def sign_in(self, email: str, password: str) -> dict:
        """Exchange email and password for a session.

        Returns:
            dict with 'access_token', 'refresh_token' and 'user_id'
        """
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            skip_auth=True,
        )
        data = response.json()
        user = data.get("user") or {}
        if not data.get("access_token") or not user.get("id"):
            raise AuthenticationError("Sign-in response did not contain a session")
        return {
            "access_token": data["access_token"],
            "refresh_token": data.get("refresh_token"),
            "user_id": user["id"],
            "email": user.get("email", email),
        }

    async def sign_out(self) -> None:
        """Revoke the current session on the server."""
        await self.client.post("/auth/v1/logout")
