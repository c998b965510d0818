"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                    "avatar": "https://example.com/uploads/jane.png",
                }
            ]
        }
    }

    name: str = Field(..., min_length=4, max_length=30)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    avatar: str | None = None


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=254)


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., max_length=128)


class UpdatePasswordRequest(BaseModel):
    old_password: str = Field(..., max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., max_length=128)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Jane Smith", "email": "jane.smith@example.com"}]}}

    name: str | None = Field(None, min_length=4, max_length=30)
    email: str | None = Field(None, max_length=254)
    avatar: str | None = None


class AdminUpdateUserRequest(BaseModel):
    name: str | None = Field(None, min_length=4, max_length=30)
    email: str | None = Field(None, max_length=254)
    role: str | None = Field(None, pattern="^(user|vendor|admin)$")


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"


class MessageResponse(BaseModel):
    status: str = "ok"
    message: str


class AvatarResponse(BaseModel):
    public_id: str
    url: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    avatar: AvatarResponse | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class SessionResponse(BaseModel):
    """Returned by register, login and password changes; the token is also set as a cookie."""

    token: str
    user: UserResponse
