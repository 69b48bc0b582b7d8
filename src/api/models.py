"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional so that missing values are reported as 400
with a field-specific message instead of a generic 422.
"""

from pydantic import BaseModel, ConfigDict, Field


class SendCodeRequest(BaseModel):
    """Request model for sending a verification code."""

    telegram: str | None = Field(default=None, description="Telegram username")


class VerifyCodeRequest(BaseModel):
    """Request model for verifying a code."""

    telegram: str | None = Field(default=None, description="Telegram username")
    code: str | None = Field(default=None, description="6-digit verification code")


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    full_name: str | None = Field(default=None, alias="fullName")
    student_id: str | None = Field(default=None, alias="studentId")
    email: str | None = None
    phone: str | None = None
    telegram: str | None = Field(default=None, description="Telegram username")
    login: str | None = None
    password: str | None = None


class SuccessResponse(BaseModel):
    """Response model for a successful operation."""

    success: bool = True


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    success: bool = True
    user_id: int = Field(serialization_alias="userId")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: bool = False
    error: str
