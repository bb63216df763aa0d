"""Service that records and reads daily nutrition totals."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from nutrilog.domain.nutrition import DailyNutrition, NutritionEntry, accumulate
from nutrilog.errors import StoreError, ValidationError
from nutrilog.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Applies nutrition entries to a user's history.

    Each write is a compare-and-set on the user document's version. When
    another write got there first the history is re-read and the entry is
    applied again, up to ``write_attempts`` times.
    """

    user_service: UserService
    write_attempts: int = 3

    def record(self, username: str, payload: dict[str, object]) -> DailyNutrition:
        """Add an entry's deltas to the user's totals for its date."""
        try:
            entry = NutritionEntry.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

        repository = self.user_service.repository
        for attempt in range(1, self.write_attempts + 1):
            user = self.user_service.get_user(username)
            history = accumulate(user.daily_nutrition, entry)
            if repository.save_daily_nutrition(user.id, history, user.version):
                return next(record for record in history if record.day == entry.day)
            _logger.warning(
                "Nutrition write conflict: username=%s attempt=%s",
                username,
                attempt,
            )
        raise StoreError("Nutrition history changed concurrently; giving up")

    def get_history(self, username: str) -> list[DailyNutrition]:
        """Return the user's daily records in stored order."""
        return list(self.user_service.get_user(username).daily_nutrition)
