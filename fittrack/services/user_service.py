import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from fittrack.core.clock import local_today
from fittrack.engine.ranks import compute_rank, rank_progress
from fittrack.engine.streaks import correct_streak
from fittrack.models.user import User
from fittrack.models.weight_log import WeightLog
from fittrack.schemas.user import LeaderboardEntry, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

CLEARABLE_PROFILE_FIELDS = {"age", "goal_weight"}


def to_user_response(user: User) -> UserResponse:
    response = UserResponse.model_validate(user)
    response.level = rank_progress(user.xp or 0)
    return response


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def refresh_streak(self, user: User, today: Optional[date] = None) -> User:
        """Drop a stale streak to 0 when the user has not logged a workout since before yesterday."""
        today = today or local_today()
        corrected = correct_streak(user.last_workout_date, today, user.streak or 0)
        if corrected != user.streak:
            logger.info(f"Streak for user {user.id} reset from {user.streak} to {corrected}")
            user.streak = corrected
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(user)
        return user

    def record_weight(self, user: User, weight: float, recorded_on: Optional[date] = None) -> WeightLog:
        """Set the user's current weight and keep one log entry per day."""
        recorded_on = recorded_on or local_today()
        entry = self.db.query(WeightLog).filter(
            WeightLog.user_id == user.id,
            WeightLog.recorded_on == recorded_on
        ).first()
        if entry:
            entry.weight = weight
        else:
            entry = WeightLog(user_id=user.id, weight=weight, recorded_on=recorded_on)
            self.db.add(entry)
        user.weight = weight
        return entry

    def update_profile(self, user: User, user_update: UserUpdate) -> User:
        update_data = user_update.model_dump(exclude_unset=True)
        new_weight = update_data.pop("weight", None)
        # An explicit null only clears optional columns; required ones keep their value
        update_data = {
            field: value for field, value in update_data.items()
            if value is not None or field in CLEARABLE_PROFILE_FIELDS
        }
        try:
            for field, value in update_data.items():
                setattr(user, field, value)
            if new_weight is not None and new_weight != user.weight:
                self.record_weight(user, new_weight)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def leaderboard(self, limit: int = 10) -> List[LeaderboardEntry]:
        users = (
            self.db.query(User)
            .filter(User.is_active.is_(True))
            .order_by(User.xp.desc(), User.id.asc())
            .limit(limit)
            .all()
        )
        return [
            LeaderboardEntry(
                position=i + 1,
                username=u.username,
                xp=u.xp,
                rank=compute_rank(u.xp),
                streak=u.streak,
            )
            for i, u in enumerate(users)
        ]
