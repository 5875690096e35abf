import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from fittrack.core.clock import day_bounds, local_tz
from fittrack.core.config import settings
from fittrack.engine.calories import estimate_calories
from fittrack.engine.catalog import COUNT, DEFAULT_CATALOG, WorkoutCatalog
from fittrack.engine.ranks import compute_xp_reward, rank_progress
from fittrack.engine.streaks import apply_streak
from fittrack.engine.weekly import workout_breakdown
from fittrack.models.user import User
from fittrack.models.workout import Workout
from fittrack.schemas.workout import (
    WorkoutCreate,
    WorkoutCreateResponse,
    WorkoutEstimate,
    WorkoutEstimateRequest,
    WorkoutProgress,
    WorkoutResponse,
    WorkoutSummary,
)
from fittrack.utils.dates import to_local_date, utc_now

logger = logging.getLogger(__name__)


class WorkoutService:
    def __init__(self, db: Session, catalog: WorkoutCatalog = DEFAULT_CATALOG):
        self.db = db
        self.catalog = catalog

    def estimate(self, request: WorkoutEstimateRequest, user: User) -> WorkoutEstimate:
        calories = estimate_calories(
            request.workout_type,
            duration_minutes=request.duration_minutes,
            reps=request.reps,
            sets=request.sets,
            intensity=request.intensity,
            user_weight_kg=user.weight,
            catalog=self.catalog,
            reference_weight_kg=settings.reference_weight_kg,
        )
        return WorkoutEstimate(
            workout_type=request.workout_type,
            input_mode=self.catalog[request.workout_type].input_mode,
            calories=calories,
            xp=compute_xp_reward(calories, floor=settings.xp_floor, divisor=settings.xp_divisor),
        )

    def create_workout(self, user: User, workout_create: WorkoutCreate) -> WorkoutCreateResponse:
        """Insert the workout and credit XP and streak in one transaction.

        The user row is locked for the duration of the transaction and XP is
        incremented in SQL, so simultaneous submissions for the same user are
        both counted. Any failure rolls back both the workout and the credit.
        """
        estimate = self.estimate(workout_create, user)
        logged_at = workout_create.logged_at or utc_now()
        activity_day = to_local_date(logged_at, local_tz())

        try:
            locked_user = (
                self.db.query(User)
                .filter(User.id == user.id)
                .populate_existing()
                .with_for_update()
                .one()
            )

            workout = Workout(
                user_id=locked_user.id,
                workout_type=estimate.workout_type,
                input_mode=estimate.input_mode,
                duration_minutes=0 if estimate.input_mode == COUNT else (workout_create.duration_minutes or 0),
                reps=workout_create.reps if estimate.input_mode == COUNT else None,
                sets=(workout_create.sets or 1) if estimate.input_mode == COUNT else None,
                intensity=workout_create.intensity,
                calories_burned=estimate.calories,
                xp_earned=estimate.xp,
                notes=workout_create.notes,
                logged_at=logged_at,
            )
            self.db.add(workout)

            self.db.query(User).filter(User.id == locked_user.id).update(
                {User.xp: User.xp + estimate.xp}, synchronize_session=False
            )

            state = apply_streak(locked_user.last_workout_date, activity_day, locked_user.streak or 0)
            locked_user.streak = state.streak_count
            locked_user.last_workout_date = state.last_activity_date

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(f"Failed to log workout for user {user.id}")
            raise

        self.db.refresh(workout)
        self.db.refresh(locked_user)
        logger.info(
            f"User {locked_user.id} logged {workout.workout_type}: "
            f"{workout.calories_burned} kcal, +{workout.xp_earned} XP, streak {locked_user.streak}"
        )
        return WorkoutCreateResponse(
            workout=WorkoutResponse.model_validate(workout),
            user=WorkoutProgress(
                xp=locked_user.xp,
                streak=locked_user.streak,
                level=rank_progress(locked_user.xp),
            ),
        )

    def list_workouts(
        self,
        user_id: int,
        skip: int = 0,
        limit: int = 100,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        workout_type: Optional[str] = None,
    ) -> List[Workout]:
        query = self.db.query(Workout).filter(Workout.user_id == user_id)
        if start_date:
            query = query.filter(Workout.logged_at >= day_bounds(start_date, start_date)[0])
        if end_date:
            query = query.filter(Workout.logged_at < day_bounds(end_date, end_date)[1])
        if workout_type:
            query = query.filter(Workout.workout_type == workout_type)
        return query.order_by(Workout.logged_at.desc()).offset(skip).limit(limit).all()

    def workouts_between(self, user_id: int, start: date, end: date) -> List[Workout]:
        lower, upper = day_bounds(start, end)
        return self.db.query(Workout).filter(
            Workout.user_id == user_id,
            Workout.logged_at >= lower,
            Workout.logged_at < upper
        ).all()

    def get_workout(self, user_id: int, workout_id: int) -> Optional[Workout]:
        return self.db.query(Workout).filter(
            Workout.id == workout_id,
            Workout.user_id == user_id
        ).first()

    def delete_workout(self, workout: Workout) -> None:
        # XP already granted is kept; the record goes away
        self.db.delete(workout)
        self.db.commit()

    def summary(self, user_id: int, start: Optional[date] = None, end: Optional[date] = None) -> WorkoutSummary:
        query = self.db.query(Workout).filter(Workout.user_id == user_id)
        if start:
            query = query.filter(Workout.logged_at >= day_bounds(start, start)[0])
        if end:
            query = query.filter(Workout.logged_at < day_bounds(end, end)[1])
        workouts = query.all()
        return WorkoutSummary(
            total_workouts=len(workouts),
            total_calories=sum(w.calories_burned for w in workouts),
            total_duration_minutes=sum(w.duration_minutes or 0 for w in workouts),
            total_xp=sum(w.xp_earned for w in workouts),
            breakdown=workout_breakdown(workouts),
        )
