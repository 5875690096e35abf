from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from fittrack.core.database import get_db
from fittrack.api.deps import get_current_user
from fittrack.schemas.user import LeaderboardEntry, UserResponse, UserUpdate
from fittrack.schemas.progress import UserStats
from fittrack.models.user import User
from fittrack.services.progress_service import ProgressService
from fittrack.services.user_service import UserService, to_user_response

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def read_user_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    UserService(db).refresh_streak(current_user)
    return to_user_response(current_user)


@router.put("/me", response_model=UserResponse)
def update_user_me(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update body metrics and goals. A changed weight is also written to the weight history."""
    user = UserService(db).update_profile(current_user, user_update)
    return to_user_response(user)


@router.get("/stats", response_model=UserStats)
def read_user_stats(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Dashboard feed: rank, today's totals, the Mon..Sun week, workout breakdown and insights"""
    UserService(db).refresh_streak(current_user)
    return ProgressService(db).stats(current_user)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def read_leaderboard(
    limit: int = Query(10, ge=1, le=100, description="Number of users to return"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return UserService(db).leaderboard(limit)
