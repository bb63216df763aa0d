"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request, status

from nutrilog.api.serializers import serialize_food

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/users", dependencies=[Depends(require_admin)])
def list_users(request: Request) -> dict[str, object]:
    """Return users with nutrition logging summaries."""
    container: AppContainer = request.app.state.container
    return {"users": container.admin_service.list_users()}


@router.post("/foods", dependencies=[Depends(require_admin)])
def add_global_food(
    request: Request, payload: dict[str, object] = Body(...)
) -> dict[str, str]:
    """Add a food visible to every user."""
    container: AppContainer = request.app.state.container
    food = container.food_service.add_global_food(payload)
    return {"message": f"{food.name} added successfully", "id": str(food.id)}


@router.get("/foods", dependencies=[Depends(require_admin)])
def list_all_foods(request: Request) -> dict[str, object]:
    """Return every catalog item."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_all()
    return {"foods": [serialize_food(food) for food in foods]}
