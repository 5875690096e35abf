from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from fittrack.core.database import get_db
from fittrack.core.exceptions import InvalidInputError, UnknownFoodError
from fittrack.api.deps import get_current_user
from fittrack.engine.nutrition import DEFAULT_FOODS, NutritionEstimate, estimate_nutrition, get_food, search_foods
from fittrack.models.user import User
from fittrack.schemas.meal import (
    FoodListResponse,
    FoodResponse,
    MealCreate,
    MealDayResponse,
    MealEstimateRequest,
    MealResponse,
    MealWeeklyResponse,
)
from fittrack.services.meal_service import MealService

router = APIRouter()


@router.get("/common", response_model=FoodListResponse)
def get_common_foods():
    """Foods with known nutrition per 100 g"""
    return FoodListResponse(foods=[FoodResponse.model_validate(f) for f in DEFAULT_FOODS.values()])


@router.get("/search", response_model=FoodListResponse)
def search_common_foods(q: str = Query(..., min_length=1, max_length=100, description="Food name to search for")):
    return FoodListResponse(foods=[FoodResponse.model_validate(f) for f in search_foods(q)])


@router.post("/estimate", response_model=NutritionEstimate)
def estimate_meal(estimate_request: MealEstimateRequest):
    """Nutrition for a portion of a common food"""
    try:
        food = get_food(estimate_request.food_key)
        return estimate_nutrition(food, estimate_request.quantity, estimate_request.unit)
    except UnknownFoodError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    meal_data: MealCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Log a meal, either from the common food list or entered by hand"""
    try:
        return MealService(db).create_meal(current_user, meal_data)
    except (UnknownFoodError, InvalidInputError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/", response_model=List[MealResponse])
def get_meals(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Number of records to return"),
    start_date: Optional[date] = Query(None, description="Filter by start date"),
    end_date: Optional[date] = Query(None, description="Filter by end date"),
    meal_type: Optional[str] = Query(None, description="Filter by meal type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date must be before or equal to end date"
        )
    return MealService(db).list_meals(current_user.id, skip, limit, start_date, end_date, meal_type)


@router.get("/today", response_model=MealDayResponse)
def get_today_meals(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Today's meals with calorie and macro totals against the calorie goal"""
    return MealService(db).day(current_user)


@router.get("/weekly", response_model=MealWeeklyResponse)
def get_weekly_meals(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Daily intake over the last 7 days"""
    return MealService(db).weekly(current_user)


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    meal = MealService(db).get_meal(current_user.id, meal_id)
    if not meal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found")
    return meal


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = MealService(db)
    meal = service.get_meal(current_user.id, meal_id)
    if not meal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found")
    service.delete_meal(meal)
    return {"success": True, "message": "Meal deleted successfully"}
