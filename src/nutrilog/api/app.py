"""FastAPI application factory."""

import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from nutrilog.api.admin import router as admin_router
from nutrilog.api.auth import require_user
from nutrilog.api.serializers import serialize_food
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer
from nutrilog.domain.nutrition import daily_nutrition_to_dict
from nutrilog.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

AUTH_TOKEN_HEADER = "auth-token"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> Response:
        return JSONResponse(
            status_code=422,
            content={"msg": exc.errors},
        )

    @app.exception_handler(ConflictError)
    async def conflict_error(_: Request, exc: ConflictError) -> Response:
        return PlainTextResponse(str(exc), status_code=status.HTTP_409_CONFLICT)

    @app.exception_handler(AuthError)
    async def auth_error(_: Request, exc: AuthError) -> Response:
        return PlainTextResponse(str(exc), status_code=status.HTTP_401_UNAUTHORIZED)

    @app.exception_handler(NotFoundError)
    async def not_found_error(_: Request, exc: NotFoundError) -> Response:
        return PlainTextResponse(str(exc), status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> Response:
        logger.error(
            "Store failure on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return PlainTextResponse(
            "Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/signup", status_code=status.HTTP_201_CREATED)
    def signup(request: Request, payload: Any = Body(None)) -> Response:
        """Register a user and return a token for it."""
        state_container: AppContainer = request.app.state.container
        invalid_input = PlainTextResponse(
            "Invalid input", status_code=status.HTTP_400_BAD_REQUEST
        )
        if not isinstance(payload, dict):
            return invalid_input
        try:
            result = state_container.auth_service.register(payload)
        except ValidationError:
            return invalid_input
        except StoreError:
            logger.exception("Failed to save new user")
            return PlainTextResponse(
                "Our server has some issue", status_code=status.HTTP_404_NOT_FOUND
            )
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={
                "token": result.token,
                "username": result.username,
                "id": str(result.user_id),
            },
        )

    @app.post("/login")
    def login(request: Request, payload: dict[str, object] = Body(...)) -> Response:
        """Exchange credentials for a token."""
        state_container: AppContainer = request.app.state.container
        username = payload.get("username")
        password = payload.get("password")
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthError("Wrong credentials")
        result = state_container.auth_service.authenticate(username, password)
        return JSONResponse(
            content={"token": result.token},
            headers={AUTH_TOKEN_HEADER: result.token},
        )

    @app.get("/profile")
    def profile(
        request: Request, username: str = Depends(require_user)
    ) -> dict[str, str]:
        """Return the caller's profile fields."""
        state_container: AppContainer = request.app.state.container
        user_profile = state_container.user_service.get_profile(username)
        return {
            "name": user_profile.name,
            "username": user_profile.username,
            "email": user_profile.email,
        }

    @app.post("/addFood")
    def add_food(
        request: Request,
        payload: dict[str, object] = Body(...),
        username: str = Depends(require_user),
    ) -> dict[str, str]:
        """Add a food owned by the caller."""
        state_container: AppContainer = request.app.state.container
        food = state_container.food_service.add_food(username, payload)
        return {"message": f"{food.name} added successfully", "id": str(food.id)}

    @app.get("/foods")
    def list_foods(
        request: Request, username: str = Depends(require_user)
    ) -> list[dict[str, object]]:
        """Return the caller's foods and all global foods."""
        state_container: AppContainer = request.app.state.container
        return [
            serialize_food(food)
            for food in state_container.food_service.list_foods(username)
        ]

    @app.post("/addNutrition")
    def add_nutrition(
        request: Request,
        payload: dict[str, object] = Body(...),
        username: str = Depends(require_user),
    ) -> Response:
        """Add a nutrition entry to the caller's daily totals."""
        state_container: AppContainer = request.app.state.container
        state_container.nutrition_service.record(username, payload)
        return PlainTextResponse("Nutrition data added")

    @app.get("/getNutrition")
    def get_nutrition(
        request: Request, username: str = Depends(require_user)
    ) -> list[dict[str, object]]:
        """Return the caller's daily nutrition history."""
        state_container: AppContainer = request.app.state.container
        return [
            daily_nutrition_to_dict(record)
            for record in state_container.nutrition_service.get_history(username)
        ]

    @app.put("/updatePassword")
    def update_password(
        request: Request,
        payload: dict[str, object] = Body(...),
        username: str = Depends(require_user),
    ) -> Response:
        """Replace the caller's password."""
        state_container: AppContainer = request.app.state.container
        state_container.auth_service.change_password(username, payload)
        return PlainTextResponse("Password updated")

    return app

