from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date

from fittrack.engine.body import BodySummary
from fittrack.engine.insights import Insight
from fittrack.engine.weekly import DailyTotals, DayDetail, WeeklyReport, WeeklyTotals, WorkoutTypeBreakdown
from fittrack.schemas.user import UserResponse

Period = Literal["week", "month"]


class WeightUpdate(BaseModel):
    weight: float = Field(..., ge=30, le=300)


class WeightEntry(BaseModel):
    id: int
    weight: float
    recorded_on: date

    class Config:
        from_attributes = True


class WeightHistory(BaseModel):
    entries: List[WeightEntry]
    current_weight: float
    goal_weight: Optional[float] = None
    change: float = Field(0, description="Latest minus earliest weight in the range")


class ProgressHistory(BaseModel):
    start_date: date
    end_date: date
    days: List[DailyTotals]
    totals: WeeklyTotals


class PeriodSummary(BaseModel):
    period: Period
    start_date: date
    end_date: date
    totals: WeeklyTotals
    active_days: int
    breakdown: List[WorkoutTypeBreakdown]


class UserStats(BaseModel):
    user: UserResponse
    today: DayDetail
    weekly: WeeklyReport
    workout_breakdown: List[WorkoutTypeBreakdown]
    insights: List[Insight]
    body: Optional[BodySummary] = None
