"""Models for account payloads."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8


class Registration(BaseModel):
    """Signup payload."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    username: str = Field(min_length=MIN_USERNAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class PasswordChange(BaseModel):
    """Payload for replacing a user's password."""

    new_password: str = Field(alias="newPassword", min_length=MIN_PASSWORD_LENGTH)
