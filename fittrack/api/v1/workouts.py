from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from fittrack.core.database import get_db
from fittrack.core.exceptions import InvalidInputError, UnknownActivityTypeError
from fittrack.api.deps import get_current_user
from fittrack.engine.catalog import DEFAULT_CATALOG
from fittrack.models.user import User
from fittrack.schemas.workout import (
    WorkoutCreate,
    WorkoutCreateResponse,
    WorkoutEstimate,
    WorkoutEstimateRequest,
    WorkoutResponse,
    WorkoutSummary,
    WorkoutTypeResponse,
)
from fittrack.services.workout_service import WorkoutService

router = APIRouter()


@router.get("/types", response_model=List[WorkoutTypeResponse])
def get_workout_types():
    """Workout catalog: duration based types with kcal per 30 min, count based with kcal per rep"""
    return [
        WorkoutTypeResponse(
            key=t.key,
            label=t.label,
            icon=t.icon,
            input_mode=t.input_mode,
            calories_per_30_min=t.calories_per_30_min,
            calories_per_rep=t.calories_per_rep,
            calories_per_10_reps=t.calories_per_10_reps,
        )
        for t in DEFAULT_CATALOG.values()
    ]


@router.post("/estimate", response_model=WorkoutEstimate)
def estimate_workout(
    estimate_request: WorkoutEstimateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Preview calories and XP for a workout without logging it"""
    try:
        return WorkoutService(db).estimate(estimate_request, current_user)
    except (InvalidInputError, UnknownActivityTypeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/", response_model=WorkoutCreateResponse, status_code=status.HTTP_201_CREATED)
def create_workout(
    workout_data: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Log a workout for the current user.

    Calories are estimated from the workout catalog and the user's weight, and
    the XP reward (half the calories, at least 5) is credited together with the
    streak update. Both values are stored on the workout and never recomputed.

    **Example Request Body:**
    ```json
    {"workout_type": "running", "duration_minutes": 45, "intensity": "high"}
    ```
    ```json
    {"workout_type": "pushups", "reps": 20, "sets": 3}
    ```
    """
    try:
        return WorkoutService(db).create_workout(current_user, workout_data)
    except (InvalidInputError, UnknownActivityTypeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/", response_model=List[WorkoutResponse])
def get_workouts(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Number of records to return"),
    start_date: Optional[date] = Query(None, description="Filter by start date"),
    end_date: Optional[date] = Query(None, description="Filter by end date"),
    workout_type: Optional[str] = Query(None, description="Filter by workout type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get workouts for the current user, newest first"""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date must be before or equal to end date"
        )
    return WorkoutService(db).list_workouts(current_user.id, skip, limit, start_date, end_date, workout_type)


@router.get("/summary", response_model=WorkoutSummary)
def get_workout_summary(
    start_date: Optional[date] = Query(None, description="Start date for summary"),
    end_date: Optional[date] = Query(None, description="End date for summary"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals and per-type breakdown of the user's workouts"""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date must be before or equal to end date"
        )
    return WorkoutService(db).summary(current_user.id, start_date, end_date)


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    workout = WorkoutService(db).get_workout(current_user.id, workout_id)
    if not workout:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Workout not found"
        )
    return workout


@router.delete("/{workout_id}")
def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a workout. XP already earned is kept."""
    service = WorkoutService(db)
    workout = service.get_workout(current_user.id, workout_id)
    if not workout:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Workout not found"
        )
    service.delete_workout(workout)
    return {"success": True, "message": "Workout deleted successfully"}
