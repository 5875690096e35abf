import logging
from datetime import date, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from fittrack.core.clock import local_today, local_tz
from fittrack.engine.body import body_summary
from fittrack.engine.insights import Goals, generate_insights
from fittrack.engine.weekly import (
    WINDOW_DAYS,
    aggregate_day,
    aggregate_days,
    aggregate_week,
    sum_totals,
    workout_breakdown,
)
from fittrack.models.user import User
from fittrack.models.weight_log import WeightLog
from fittrack.schemas.progress import (
    PeriodSummary,
    ProgressHistory,
    UserStats,
    WeightEntry,
    WeightHistory,
)
from fittrack.services.meal_service import MealService
from fittrack.services.user_service import UserService, to_user_response
from fittrack.services.workout_service import WorkoutService

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30}


class ProgressService:
    """Read-side analytics. Everything here is recomputed from logged records."""

    def __init__(self, db: Session):
        self.db = db
        self.workouts = WorkoutService(db)
        self.meals = MealService(db)

    def history(self, user: User, days: int = 30, end: Optional[date] = None) -> ProgressHistory:
        end = end or local_today()
        start = end - timedelta(days=days - 1)
        daily = aggregate_days(
            self.workouts.workouts_between(user.id, start, end),
            self.meals.meals_between(user.id, start, end),
            start,
            end,
            local_tz(),
        )
        return ProgressHistory(start_date=start, end_date=end, days=daily, totals=sum_totals(daily))

    def today(self, user: User, day: Optional[date] = None):
        day = day or local_today()
        return aggregate_day(
            self.workouts.workouts_between(user.id, day, day),
            self.meals.meals_between(user.id, day, day),
            day,
            local_tz(),
        )

    def weekly(self, user: User, anchor: Optional[date] = None):
        anchor = anchor or local_today()
        start = anchor - timedelta(days=WINDOW_DAYS - 1)
        return aggregate_week(
            self.workouts.workouts_between(user.id, start, anchor),
            self.meals.meals_between(user.id, start, anchor),
            anchor,
            local_tz(),
        )

    def period_summary(self, user: User, period: str = "week", end: Optional[date] = None) -> PeriodSummary:
        end = end or local_today()
        start = end - timedelta(days=PERIOD_DAYS[period] - 1)
        workouts = self.workouts.workouts_between(user.id, start, end)
        daily = aggregate_days(workouts, self.meals.meals_between(user.id, start, end), start, end, local_tz())
        return PeriodSummary(
            period=period,
            start_date=start,
            end_date=end,
            totals=sum_totals(daily),
            active_days=sum(1 for d in daily if d.workout_count > 0),
            breakdown=workout_breakdown(workouts),
        )

    def weight_history(self, user: User, days: int = 90) -> WeightHistory:
        start = local_today() - timedelta(days=days - 1)
        entries = (
            self.db.query(WeightLog)
            .filter(WeightLog.user_id == user.id, WeightLog.recorded_on >= start)
            .order_by(WeightLog.recorded_on.asc())
            .all()
        )
        change = round(entries[-1].weight - entries[0].weight, 1) if entries else 0
        return WeightHistory(
            entries=[WeightEntry.model_validate(e) for e in entries],
            current_weight=user.weight,
            goal_weight=user.goal_weight,
            change=change,
        )

    def update_weight(self, user: User, weight: float) -> WeightEntry:
        entry = UserService(self.db).record_weight(user, weight)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entry)
        logger.info(f"User {user.id} recorded weight {weight} kg")
        return WeightEntry.model_validate(entry)

    def stats(self, user: User) -> UserStats:
        """Everything the dashboard needs in one payload."""
        today = local_today()
        weekly = self.weekly(user, today)
        today_totals = self.today(user, today)
        goals = Goals(daily_burn_goal=user.daily_burn_goal, daily_calorie_goal=user.daily_calorie_goal)
        start = weekly.start_date
        return UserStats(
            user=to_user_response(user),
            today=today_totals,
            weekly=weekly,
            workout_breakdown=workout_breakdown(self.workouts.workouts_between(user.id, start, today)),
            insights=generate_insights(today_totals, weekly.totals, goals, user.streak),
            body=body_summary(user.weight, user.height, user.goal_weight),
        )
