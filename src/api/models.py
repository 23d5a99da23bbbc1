"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class RegisterRequest(BaseModel):
    """
    Request model for user registration.

    Both fields are optional at the schema level so that an absent or
    blank field reaches the domain and is reported as missing rather
    than as a schema error.
    """

    email: EmailStr | None = Field(default=None, description="Email address to register")
    password: str | None = Field(default=None, description="User password (min 6 characters)")

    @model_validator(mode="before")
    @classmethod
    def strip_email(cls, data: Any) -> Any:
        """Trim surrounding whitespace; a blank email counts as missing."""
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data = {**data, "email": data["email"].strip() or None}
        return data


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    model_config = ConfigDict(populate_by_name=True)

    msg: str
    user_id: UUID = Field(alias="userId")


class MessageResponse(BaseModel):
    """Response model carrying a human-readable message."""

    msg: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
