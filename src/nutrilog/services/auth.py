"""Registration, login and token checks."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from nutrilog.domain.accounts import PasswordChange, Registration
from nutrilog.domain.models import AuthResult
from nutrilog.errors import AuthError, ConflictError, ValidationError
from nutrilog.services.users import UserService

_logger = logging.getLogger(__name__)

WRONG_CREDENTIALS = "Wrong credentials"


class PasswordHasher(Protocol):
    """Salted one-way hashing of raw passwords."""

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the hash."""


class TokenCodec(Protocol):
    """Issues and verifies bearer tokens."""

    def issue(self, username: str) -> str:
        """Return a signed token carrying the username."""

    def verify(self, token: str) -> str:
        """Return the username embedded in a valid token.

        Raises AuthError for malformed, foreign or expired tokens.
        """


@dataclass
class AuthService:
    """Auth gate in front of every per-user operation."""

    user_service: UserService
    hasher: PasswordHasher
    tokens: TokenCodec

    def register(self, payload: dict[str, object]) -> AuthResult:
        """Create a user and return a fresh token for it."""
        try:
            registration = Registration.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

        repository = self.user_service.repository
        if repository.get_by_username(registration.username) is not None:
            raise ConflictError("Username already exists.")

        user = repository.create_user(
            name=registration.name,
            username=registration.username,
            email=str(registration.email),
            password_hash=self.hasher.hash(registration.password),
        )
        _logger.info("User created: username=%s", user.username)
        return AuthResult(
            token=self.tokens.issue(user.username),
            username=user.username,
            user_id=user.id,
        )

    def authenticate(self, username: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token."""
        user = self.user_service.repository.get_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            _logger.info("Rejected login: username=%s", username)
            raise AuthError(WRONG_CREDENTIALS)
        return AuthResult(
            token=self.tokens.issue(user.username),
            username=user.username,
            user_id=user.id,
        )

    def authorize(self, token: str | None) -> str:
        """Return the username carried by a presented bearer token."""
        if not token:
            raise AuthError("Missing token")
        return self.tokens.verify(token)

    def change_password(self, username: str, payload: dict[str, object]) -> None:
        """Re-hash and store a new password.

        The current password is not checked.
        """
        try:
            change = PasswordChange.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
        user = self.user_service.get_user(username)
        self.user_service.repository.update_password_hash(
            user.id, self.hasher.hash(change.new_password)
        )

