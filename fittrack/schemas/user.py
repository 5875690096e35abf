# schemas/user.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import date, datetime

from fittrack.engine.ranks import RankProgress

Gender = Literal["male", "female", "other"]
GoalType = Literal["weight_loss", "muscle_gain", "maintenance", "endurance"]


class BodyMetrics(BaseModel):
    height: float = Field(170, ge=100, le=250, description="Height in cm")
    weight: float = Field(70, ge=30, le=300, description="Weight in kg")
    age: Optional[int] = Field(25, ge=13, le=100)
    gender: Gender = "male"
    body_fat: float = Field(20, ge=3, le=60, description="Body fat percentage")


class UserBase(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30, pattern="^[a-zA-Z0-9_-]+$")


class UserCreate(UserBase, BodyMetrics):
    password: str = Field(..., min_length=6, max_length=100)
    goal: GoalType = "maintenance"

    @field_validator('username', mode='before')
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('email', mode='before')
    def lowercase_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator('password', mode='after')
    def validate_password(cls, v):
        if not v.strip():
            raise ValueError('Password cannot be blank')
        if len(v) < 6:
            raise ValueError('Password must be at least 6 characters long')
        return v


class UserUpdate(BaseModel):
    """Profile update: body metrics and goals. Username and e-mail stay fixed."""
    height: Optional[float] = Field(None, ge=100, le=250)
    weight: Optional[float] = Field(None, ge=30, le=300)
    age: Optional[int] = Field(None, ge=13, le=100)
    gender: Optional[Gender] = None
    body_fat: Optional[float] = Field(None, ge=3, le=60)
    goal: Optional[GoalType] = None
    goal_weight: Optional[float] = Field(None, ge=30, le=300)
    daily_calorie_goal: Optional[int] = Field(None, ge=500, le=10000)
    daily_burn_goal: Optional[int] = Field(None, ge=1, le=5000)


class UserInDB(UserBase):
    id: int
    height: float
    weight: float
    age: Optional[int] = None
    gender: str
    body_fat: float
    goal: str
    goal_weight: Optional[float] = None
    daily_calorie_goal: int
    daily_burn_goal: int
    xp: int
    streak: int
    last_workout_date: Optional[date] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserResponse(UserInDB):
    """Public user response with the derived rank - excludes sensitive data"""
    level: Optional[RankProgress] = None


class LeaderboardEntry(BaseModel):
    position: int
    username: str
    xp: int
    rank: str
    streak: int
