import logging
from datetime import date, timedelta
from typing import List, Mapping, Optional
from sqlalchemy.orm import Session

from fittrack.core.clock import day_bounds, local_today, local_tz
from fittrack.engine.nutrition import DEFAULT_FOODS, Food, estimate_nutrition, get_food
from fittrack.engine.weekly import WINDOW_DAYS, aggregate_day, aggregate_days, sum_totals
from fittrack.models.meal import Meal
from fittrack.models.user import User
from fittrack.schemas.meal import MealCreate, MealDayResponse, MealResponse, MealWeeklyResponse
from fittrack.utils.dates import utc_now

logger = logging.getLogger(__name__)


class MealService:
    def __init__(self, db: Session, foods: Mapping[str, Food] = DEFAULT_FOODS):
        self.db = db
        self.foods = foods

    def create_meal(self, user: User, meal_create: MealCreate) -> Meal:
        if meal_create.food_key:
            food = get_food(meal_create.food_key, self.foods)
            nutrition = estimate_nutrition(food, meal_create.quantity, meal_create.unit)
            name = meal_create.name or food.name
            values = nutrition.model_dump()
        else:
            name = meal_create.name
            values = {
                "calories": meal_create.calories,
                "protein": meal_create.protein,
                "carbs": meal_create.carbs,
                "fats": meal_create.fats,
                "fiber": meal_create.fiber,
            }

        meal = Meal(
            user_id=user.id,
            name=name,
            food_key=meal_create.food_key,
            meal_type=meal_create.meal_type,
            quantity=meal_create.quantity,
            unit=meal_create.unit,
            logged_at=meal_create.logged_at or utc_now(),
            **values,
        )
        self.db.add(meal)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(f"Failed to log meal for user {user.id}")
            raise
        self.db.refresh(meal)
        logger.info(f"User {user.id} logged meal '{meal.name}': {meal.calories} kcal")
        return meal

    def list_meals(
        self,
        user_id: int,
        skip: int = 0,
        limit: int = 100,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        meal_type: Optional[str] = None,
    ) -> List[Meal]:
        query = self.db.query(Meal).filter(Meal.user_id == user_id)
        if start_date:
            query = query.filter(Meal.logged_at >= day_bounds(start_date, start_date)[0])
        if end_date:
            query = query.filter(Meal.logged_at < day_bounds(end_date, end_date)[1])
        if meal_type:
            query = query.filter(Meal.meal_type == meal_type)
        return query.order_by(Meal.logged_at.desc()).offset(skip).limit(limit).all()

    def meals_between(self, user_id: int, start: date, end: date) -> List[Meal]:
        lower, upper = day_bounds(start, end)
        return self.db.query(Meal).filter(
            Meal.user_id == user_id,
            Meal.logged_at >= lower,
            Meal.logged_at < upper
        ).order_by(Meal.logged_at.asc()).all()

    def get_meal(self, user_id: int, meal_id: int) -> Optional[Meal]:
        return self.db.query(Meal).filter(Meal.id == meal_id, Meal.user_id == user_id).first()

    def delete_meal(self, meal: Meal) -> None:
        self.db.delete(meal)
        self.db.commit()

    def day(self, user: User, day: Optional[date] = None) -> MealDayResponse:
        day = day or local_today()
        meals = self.meals_between(user.id, day, day)
        summary = aggregate_day([], meals, day, local_tz())
        return MealDayResponse(
            meals=[MealResponse.model_validate(m) for m in meals],
            summary=summary,
            calorie_goal=user.daily_calorie_goal,
            remaining=user.daily_calorie_goal - summary.intake,
        )

    def weekly(self, user: User, anchor: Optional[date] = None) -> MealWeeklyResponse:
        anchor = anchor or local_today()
        start = anchor - timedelta(days=WINDOW_DAYS - 1)
        meals = self.meals_between(user.id, start, anchor)
        days = aggregate_days([], meals, start, anchor, local_tz())
        totals = sum_totals(days)
        return MealWeeklyResponse(days=days, total_intake=totals.intake, avg_daily_intake=totals.avg_daily_intake)
