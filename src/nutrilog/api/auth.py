"""Bearer token dependency for per-user endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

_BEARER_PREFIX = "bearer "


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    if authorization.lower().startswith(_BEARER_PREFIX):
        return authorization[len(_BEARER_PREFIX) :].strip() or None
    return None


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
    auth_token: str | None = Header(default=None),
) -> str:
    """Resolve the username from the request's bearer token.

    ``Authorization: Bearer`` wins over the ``auth-token`` header set on login.
    """
    container: AppContainer = request.app.state.container
    token = _bearer_token(authorization) or auth_token
    return container.auth_service.authorize(token)
