from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime, timedelta, timezone

from fittrack.engine.ranks import RankProgress
from fittrack.engine.weekly import WorkoutTypeBreakdown

Intensity = Literal["low", "moderate", "high"]

# Allowed client clock drift for "now" timestamps
CLOCK_SKEW = timedelta(minutes=5)


def reject_future_timestamp(v: Optional[datetime]) -> Optional[datetime]:
    if v is None:
        return v
    aware = v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)
    if aware > datetime.now(timezone.utc) + CLOCK_SKEW:
        raise ValueError('Timestamp cannot be in the future')
    return aware.astimezone(timezone.utc)


class WorkoutTypeResponse(BaseModel):
    key: str
    label: str
    icon: str
    input_mode: str
    calories_per_30_min: Optional[float] = None
    calories_per_rep: Optional[float] = None
    calories_per_10_reps: Optional[float] = None


class WorkoutEstimateRequest(BaseModel):
    workout_type: str = Field(..., min_length=1, max_length=50)
    duration_minutes: Optional[int] = Field(None, ge=1, le=600)
    reps: Optional[int] = Field(None, ge=1, le=1000)
    sets: Optional[int] = Field(None, ge=1, le=50)
    intensity: Intensity = "moderate"

    @field_validator('workout_type', mode='after')
    def normalize_workout_type(cls, v):
        if not v.strip():
            raise ValueError('Workout type cannot be empty')
        return v.strip().lower()


class WorkoutEstimate(BaseModel):
    workout_type: str
    input_mode: str
    calories: int
    xp: int


class WorkoutCreate(WorkoutEstimateRequest):
    notes: Optional[str] = Field(None, max_length=500)
    logged_at: Optional[datetime] = Field(None, description="When the workout happened, defaults to now")

    @field_validator('logged_at', mode='after')
    def validate_logged_at(cls, v):
        return reject_future_timestamp(v)


class WorkoutResponse(BaseModel):
    id: int
    user_id: int
    workout_type: str
    input_mode: str
    duration_minutes: int
    reps: Optional[int] = None
    sets: Optional[int] = None
    intensity: str
    calories_burned: int
    xp_earned: int
    notes: Optional[str] = None
    logged_at: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorkoutProgress(BaseModel):
    """User state after a workout was credited"""
    xp: int
    streak: int
    level: RankProgress


class WorkoutCreateResponse(BaseModel):
    workout: WorkoutResponse
    user: WorkoutProgress


class WorkoutSummary(BaseModel):
    total_workouts: int
    total_calories: int
    total_duration_minutes: int
    total_xp: int
    breakdown: List[WorkoutTypeBreakdown]
