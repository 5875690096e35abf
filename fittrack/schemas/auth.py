from pydantic import BaseModel, Field, field_validator
from typing import Optional

from fittrack.schemas.user import UserResponse


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenWithUser(Token):
    user: UserResponse


class TokenData(BaseModel):
    username: Optional[str] = None


class LoginRequest(BaseModel):
    username_or_email: str = Field(..., description="Username or email address")
    password: str = Field(..., min_length=1)

    @field_validator('username_or_email', mode='after')
    def validate_username_or_email(cls, v):
        if not v or not v.strip():
            raise ValueError('Username or email is required')
        return v.strip()


class PasswordChange(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=6, max_length=100)

    @field_validator('new_password', mode='after')
    def validate_password(cls, v):
        if not v.strip():
            raise ValueError('Password cannot be blank')
        return v
