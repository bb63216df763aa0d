"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from nutrilog.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from nutrilog.adapters.jwt_token_codec import JwtTokenCodec
from nutrilog.adapters.supabase_food_repository import SupabaseFoodRepository
from nutrilog.adapters.supabase_user_repository import SupabaseUserRepository
from nutrilog.config import Settings
from nutrilog.services.admin import AdminService
from nutrilog.services.auth import AuthService
from nutrilog.services.foods import FoodCatalogService
from nutrilog.services.nutrition import NutritionService
from nutrilog.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    auth_service: AuthService
    nutrition_service: NutritionService
    food_service: FoodCatalogService
    admin_service: AdminService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    user_service = UserService(user_repository)
    auth_service = AuthService(
        user_service=user_service,
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        tokens=JwtTokenCodec(
            secret=resolved_settings.token_secret,
            ttl=timedelta(days=resolved_settings.token_ttl_days),
        ),
    )
    nutrition_service = NutritionService(
        user_service=user_service,
        write_attempts=resolved_settings.nutrition_write_attempts,
    )
    food_service = FoodCatalogService(
        user_service=user_service,
        repository=food_repository,
    )
    admin_service = AdminService(user_repository=user_repository)

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        auth_service=auth_service,
        nutrition_service=nutrition_service,
        food_service=food_service,
        admin_service=admin_service,
    )
