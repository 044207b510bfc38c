"""Authentication and profile schemas."""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from taskdesk.models.user import User
from taskdesk.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Registration (and POST /users) body."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    display_name: Optional[str] = Field(None, min_length=1, max_length=255)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserUpdateRequest(CamelModel):
    """Profile update; a new password requires the current one."""
    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    current_password: Optional[str] = Field(None, min_length=8)
    new_password: Optional[str] = Field(None, min_length=8)

    @model_validator(mode="after")
    def require_current_password(self):
        if self.new_password and not self.current_password:
            raise ValueError("Current password required to set a new password")
        return self


class UserProfile(CamelModel):
    """Public user fields; the password hash is never exposed."""
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginResponse(CamelModel):
    """Response containing the bearer token after sign in."""
    token: str
    expires_in: int
    user: UserProfile


class UserList(CamelModel):
    items: list[UserProfile]
