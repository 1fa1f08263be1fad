"""Login, token verification and logout against /auth."""

from __future__ import annotations

import logging

from learnit.api.client import ApiClient
from learnit.auth.schemas import AuthSession, User

logger = logging.getLogger(__name__)


async def login(client: ApiClient, email: str, password: str) -> AuthSession:
    """Exchange credentials for a token and attach it to ``client``.

    Raises ``ApiResponseError`` with the backend message ("Invalid
    credentials", "Account suspended...") when the login is refused.
    """
    data = await client.post("/auth/login", json={"email": email, "password": password})
    session = AuthSession.model_validate(data)
    client.set_token(session.token)
    logger.info("Logged in as %s (role=%s)", session.user.email, session.user.role)
    return session


async def verify(client: ApiClient) -> User:
    """Check that the client's token is still accepted and return its user."""
    data = await client.get("/auth/verify")
    return User.model_validate(data)


def logout(client: ApiClient) -> None:
    client.clear_token()
