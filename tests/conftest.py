"""Shared test fixtures."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from nutrilog.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from nutrilog.adapters.jwt_token_codec import JwtTokenCodec
from nutrilog.config import Settings
from nutrilog.containers import AppContainer
from nutrilog.domain.admin import AdminUser
from nutrilog.domain.foods import FoodInput, FoodItem
from nutrilog.domain.models import UserRecord
from nutrilog.domain.nutrition import DailyNutrition
from nutrilog.services.admin import AdminService
from nutrilog.services.auth import AuthService
from nutrilog.services.foods import FoodCatalogService, FoodRepository
from nutrilog.services.nutrition import NutritionService
from nutrilog.services.users import UserRepository, UserService

TEST_SECRET = "test-token-secret-that-is-long-enough-for-hs256"
# JWT-shaped so supabase-py accepts it as an API key.
TEST_SUPABASE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests.

    ``before_save`` runs once before the next nutrition write, which lets a
    test slip a competing write in between read and write.
    """

    users: dict[str, UserRecord] = field(default_factory=dict)
    save_calls: int = 0
    before_save: Callable[[], None] | None = None

    def get_by_username(self, username: str) -> UserRecord | None:
        return self.users.get(username)

    def create_user(
        self, name: str, username: str, email: str, password_hash: str
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            name=name,
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self.users[username] = user
        return user

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        user = self._by_id(user_id)
        self.users[user.username] = replace(user, password_hash=password_hash)

    def save_daily_nutrition(
        self,
        user_id: UUID,
        history: Sequence[DailyNutrition],
        expected_version: int,
    ) -> bool:
        self.save_calls += 1
        if self.before_save is not None:
            hook, self.before_save = self.before_save, None
            hook()
        user = self._by_id(user_id)
        if user.version != expected_version:
            return False
        self.users[user.username] = replace(
            user, daily_nutrition=tuple(history), version=expected_version + 1
        )
        return True

    def list_users(self) -> list[AdminUser]:
        return [
            AdminUser(
                id=user.id,
                name=user.name,
                username=user.username,
                email=user.email,
                days_logged=len(user.daily_nutrition),
                last_logged_date=max(
                    (record.day for record in user.daily_nutrition), default=None
                ),
            )
            for user in self.users.values()
        ]

    def _by_id(self, user_id: UUID) -> UserRecord:
        for user in self.users.values():
            if user.id == user_id:
                return user
        raise KeyError(user_id)


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)

    def exists_by_name(self, name: str) -> bool:
        return any(food.name == name for food in self.foods.values())

    def create_food(
        self, food: FoodInput, user_id: UUID | None, is_global: bool
    ) -> FoodItem:
        item = FoodItem(
            id=uuid4(),
            category=food.category,
            name=food.name,
            protein=food.protein,
            fat=food.fat,
            carbs=food.carbs,
            calories=food.calories,
            quantity=food.quantity,
            user_id=user_id,
            is_global=is_global,
        )
        self.foods[item.id] = item
        return item

    def list_visible(self, user_id: UUID) -> list[FoodItem]:
        return [
            food
            for food in self.foods.values()
            if food.user_id == user_id or food.is_global
        ]

    def list_all(self) -> list[FoodItem]:
        return list(self.foods.values())


def food_payload(name: str = "Banana", **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "category": "Fruit",
        "name": name,
        "protein": 1.3,
        "fat": 0.4,
        "carbs": 27,
        "calories": 105,
        "quantity": "1 medium",
    }
    payload.update(overrides)
    return payload


def nutrition_payload(
    date: str = "2024-01-01", category: str = "Fruit", **overrides: object
) -> dict[str, object]:
    payload: dict[str, object] = {
        "date": date,
        "category": category,
        "calories": 100,
        "proteins": 1,
        "carbs": 20,
        "fats": 0.5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SUPABASE_KEY,
        token_secret=TEST_SECRET,
        admin_token="admin-token",
        bcrypt_rounds=4,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def token_codec() -> JwtTokenCodec:
    return JwtTokenCodec(secret=TEST_SECRET, ttl=timedelta(days=7))


@pytest.fixture
def user_service(user_repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def auth_service(user_service: UserService, token_codec: JwtTokenCodec) -> AuthService:
    return AuthService(
        user_service=user_service,
        hasher=BcryptPasswordHasher(rounds=4),
        tokens=token_codec,
    )


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    food_repository: InMemoryFoodRepository,
    user_service: UserService,
    auth_service: AuthService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=user_service,
        auth_service=auth_service,
        nutrition_service=NutritionService(user_service=user_service),
        food_service=FoodCatalogService(
            user_service=user_service, repository=food_repository
        ),
        admin_service=AdminService(user_repository=user_repository),
    )
