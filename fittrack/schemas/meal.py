from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime

from fittrack.engine.weekly import DailyTotals, DayDetail
from fittrack.schemas.workout import reject_future_timestamp

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
Unit = Literal["grams", "ml", "cups", "tbsp", "pieces", "serving"]


class FoodResponse(BaseModel):
    key: str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float
    serving_size: Optional[float] = None
    suggested_unit: str

    class Config:
        from_attributes = True


class FoodListResponse(BaseModel):
    foods: List[FoodResponse]


class MealEstimateRequest(BaseModel):
    food_key: str = Field(..., min_length=1, max_length=50)
    quantity: float = Field(1, gt=0, le=5000)
    unit: Unit = "serving"


class MealCreate(BaseModel):
    """A meal is either picked from the food list (``food_key``) or entered by hand.

    Hand-entered meals must carry ``name`` and ``calories``; for catalog foods
    the nutrition is computed from the portion and any sent values are ignored.
    """
    food_key: Optional[str] = Field(None, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    meal_type: MealType = "snack"
    quantity: float = Field(1, gt=0, le=5000)
    unit: Unit = "serving"
    calories: Optional[int] = Field(None, ge=0, le=10000)
    protein: float = Field(0, ge=0, le=1000)
    carbs: float = Field(0, ge=0, le=1000)
    fats: float = Field(0, ge=0, le=1000)
    fiber: float = Field(0, ge=0, le=500)
    logged_at: Optional[datetime] = None

    @field_validator('name', mode='after')
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Meal name cannot be empty')
        return v.strip() if v else v

    @field_validator('logged_at', mode='after')
    def validate_logged_at(cls, v):
        return reject_future_timestamp(v)

    @model_validator(mode='after')
    def require_food_or_manual_entry(self):
        if not self.food_key and (not self.name or self.calories is None):
            raise ValueError('Provide either food_key or both name and calories')
        return self


class MealResponse(BaseModel):
    id: int
    user_id: int
    name: str
    food_key: Optional[str] = None
    meal_type: str
    quantity: float
    unit: str
    calories: int
    protein: float
    carbs: float
    fats: float
    fiber: float
    logged_at: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealDayResponse(BaseModel):
    meals: List[MealResponse]
    summary: DayDetail
    calorie_goal: int
    remaining: int


class MealWeeklyResponse(BaseModel):
    days: List[DailyTotals]
    total_intake: int
    avg_daily_intake: int
