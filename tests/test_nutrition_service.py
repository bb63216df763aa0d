"""Tests for the nutrition service."""

import pytest

from nutrilog.errors import NotFoundError, StoreError, ValidationError
from nutrilog.services.nutrition import NutritionService
from nutrilog.services.users import UserService
from tests.conftest import InMemoryUserRepository, nutrition_payload


def _service_with_user() -> tuple[NutritionService, InMemoryUserRepository]:
    repository = InMemoryUserRepository()
    repository.create_user("Ann", "ann1", "a@x.com", "hash")
    return NutritionService(UserService(repository)), repository


def test_record_persists_and_bumps_version() -> None:
    service, repository = _service_with_user()

    record = service.record("ann1", nutrition_payload(calories=100))

    assert record.totals.calories == 100
    stored = repository.users["ann1"]
    assert stored.version == 1
    assert stored.daily_nutrition == (record,)


def test_record_scenario_accumulates_per_day_and_category() -> None:
    service, _ = _service_with_user()

    service.record("ann1", nutrition_payload(category="Fruit", calories=100))
    service.record("ann1", nutrition_payload(category="Fruit", calories=50))
    record = service.record("ann1", nutrition_payload(category="Grains", calories=200))

    assert record.totals.calories == 350
    by_name = {category.name: category for category in record.categories}
    assert by_name["Fruit"].totals.calories == 150
    assert by_name["Grains"].totals.calories == 200
    assert len(service.get_history("ann1")) == 1


def test_record_is_not_idempotent() -> None:
    service, _ = _service_with_user()
    payload = nutrition_payload(calories=40)

    service.record("ann1", payload)
    record = service.record("ann1", payload)

    assert record.totals.calories == 80


def test_record_retries_after_concurrent_write() -> None:
    service, repository = _service_with_user()
    repository.before_save = lambda: service.record(
        "ann1", nutrition_payload(category="Dairy", calories=30)
    )

    service.record("ann1", nutrition_payload(category="Fruit", calories=100))

    [record] = service.get_history("ann1")
    assert record.totals.calories == 130
    assert {category.name for category in record.categories} == {"Dairy", "Fruit"}
    assert repository.users["ann1"].version == 2


def test_record_gives_up_after_write_attempts() -> None:
    repository = InMemoryUserRepository()
    repository.create_user("Ann", "ann1", "a@x.com", "hash")
    service = NutritionService(UserService(repository), write_attempts=2)
    repository.save_daily_nutrition = lambda *_args: False  # type: ignore[method-assign]

    with pytest.raises(StoreError):
        service.record("ann1", nutrition_payload())


def test_record_for_missing_user_raises_not_found() -> None:
    service = NutritionService(UserService(InMemoryUserRepository()))

    with pytest.raises(NotFoundError):
        service.record("ghost", nutrition_payload())


def test_record_rejects_malformed_payload() -> None:
    service, repository = _service_with_user()

    with pytest.raises(ValidationError) as exc_info:
        service.record("ann1", {"date": "2024-01-01", "category": "Fruit"})

    assert exc_info.value.errors
    assert repository.save_calls == 0


def test_get_history_returns_insertion_order() -> None:
    service, _ = _service_with_user()
    service.record("ann1", nutrition_payload(date="2024-01-03"))
    service.record("ann1", nutrition_payload(date="2024-01-01"))

    history = service.get_history("ann1")

    assert [record.day.isoformat() for record in history] == [
        "2024-01-03",
        "2024-01-01",
    ]


def test_get_history_for_missing_user_raises_not_found() -> None:
    service = NutritionService(UserService(InMemoryUserRepository()))

    with pytest.raises(NotFoundError):
        service.get_history("ghost")
