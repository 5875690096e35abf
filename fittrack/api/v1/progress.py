from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fittrack.core.database import get_db
from fittrack.api.deps import get_current_user
from fittrack.engine.weekly import DayDetail, WeeklyReport
from fittrack.models.user import User
from fittrack.schemas.progress import (
    Period,
    PeriodSummary,
    ProgressHistory,
    WeightEntry,
    WeightHistory,
    WeightUpdate,
)
from fittrack.services.progress_service import ProgressService

router = APIRouter()


@router.get("/", response_model=ProgressHistory)
def get_progress_history(
    days: int = Query(30, ge=1, le=365, description="Number of recent days"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Daily intake, burn and workout totals for the last N days, oldest first"""
    return ProgressService(db).history(current_user, days)


@router.get("/today", response_model=DayDetail)
def get_today_progress(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProgressService(db).today(current_user)


@router.get("/weekly", response_model=WeeklyReport)
def get_weekly_progress(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The last 7 days bucketed Mon..Sun with weekly totals"""
    return ProgressService(db).weekly(current_user)


@router.get("/summary", response_model=PeriodSummary)
def get_progress_summary(
    period: Period = Query("week", description="week or month"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ProgressService(db).period_summary(current_user, period)


@router.get("/weight", response_model=WeightHistory)
def get_weight_history(
    days: int = Query(90, ge=1, le=730, description="Number of recent days"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ProgressService(db).weight_history(current_user, days)


@router.put("/weight", response_model=WeightEntry)
def update_weight(
    weight_update: WeightUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record today's weight and make it the user's current weight"""
    return ProgressService(db).update_weight(current_user, weight_update.weight)
