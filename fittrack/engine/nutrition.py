"""Common foods and portion based nutrition estimates.

Nutrition values are per 100 g (or 100 ml). Portions in other units are
converted to a multiple of 100 g before scaling.
"""

from types import MappingProxyType
from typing import Iterable, List, Literal, Mapping, Optional

from pydantic import BaseModel

from fittrack.core.exceptions import ConfigurationError, InvalidInputError, UnknownFoodError
from fittrack.utils.rounding import round_half_up, round_to_tenth

Unit = Literal["grams", "ml", "cups", "tbsp", "pieces", "serving"]

GRAMS_PER_CUP = 240
GRAMS_PER_TBSP = 15
DEFAULT_PIECE_GRAMS = 50
DEFAULT_SERVING_GRAMS = 100
MIN_SEARCH_LENGTH = 2


class Food(BaseModel):
    key: str
    name: str
    calories: float
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    fiber: float = 0
    serving_size: Optional[float] = None
    suggested_unit: Unit = "serving"

    class Config:
        frozen = True


class NutritionEstimate(BaseModel):
    calories: int
    protein: float
    carbs: float
    fats: float
    fiber: float


def build_food_catalog(foods: Iterable[Food]) -> Mapping[str, Food]:
    catalog = {}
    for food in foods:
        if food.key in catalog:
            raise ConfigurationError(f"Duplicate food '{food.key}'")
        catalog[food.key] = food
    return MappingProxyType(catalog)


DEFAULT_FOODS = build_food_catalog([
    Food(key="egg", name="Egg, whole", calories=143, protein=13, carbs=0.7, fats=10, serving_size=50, suggested_unit="pieces"),
    Food(key="chicken_breast", name="Chicken breast, cooked", calories=165, protein=31, carbs=0, fats=3.6, serving_size=120, suggested_unit="grams"),
    Food(key="white_rice", name="White rice, cooked", calories=130, protein=2.7, carbs=28, fats=0.3, fiber=0.4, serving_size=150, suggested_unit="cups"),
    Food(key="brown_rice", name="Brown rice, cooked", calories=123, protein=2.7, carbs=26, fats=1, fiber=1.6, serving_size=150, suggested_unit="cups"),
    Food(key="oats", name="Oats, rolled", calories=389, protein=16.9, carbs=66, fats=6.9, fiber=10.6, serving_size=40, suggested_unit="serving"),
    Food(key="banana", name="Banana", calories=89, protein=1.1, carbs=23, fats=0.3, fiber=2.6, serving_size=118, suggested_unit="pieces"),
    Food(key="apple", name="Apple", calories=52, protein=0.3, carbs=14, fats=0.2, fiber=2.4, serving_size=182, suggested_unit="pieces"),
    Food(key="milk", name="Milk, whole", calories=61, protein=3.2, carbs=4.8, fats=3.3, serving_size=244, suggested_unit="ml"),
    Food(key="greek_yogurt", name="Greek yogurt, plain", calories=97, protein=9, carbs=3.9, fats=5, serving_size=170, suggested_unit="serving"),
    Food(key="bread", name="Whole wheat bread", calories=247, protein=13, carbs=41, fats=3.4, fiber=7, serving_size=32, suggested_unit="pieces"),
    Food(key="peanut_butter", name="Peanut butter", calories=588, protein=25, carbs=20, fats=50, fiber=6, serving_size=32, suggested_unit="tbsp"),
    Food(key="olive_oil", name="Olive oil", calories=884, protein=0, carbs=0, fats=100, suggested_unit="tbsp"),
    Food(key="salmon", name="Salmon, cooked", calories=206, protein=22, carbs=0, fats=12, serving_size=150, suggested_unit="grams"),
    Food(key="broccoli", name="Broccoli", calories=34, protein=2.8, carbs=7, fats=0.4, fiber=2.6, serving_size=90, suggested_unit="cups"),
    Food(key="potato", name="Potato, boiled", calories=87, protein=1.9, carbs=20, fats=0.1, fiber=1.8, serving_size=170, suggested_unit="pieces"),
    Food(key="lentils", name="Lentils, cooked", calories=116, protein=9, carbs=20, fats=0.4, fiber=7.9, serving_size=200, suggested_unit="cups"),
    Food(key="almonds", name="Almonds", calories=579, protein=21, carbs=22, fats=50, fiber=12.5, serving_size=28, suggested_unit="serving"),
    Food(key="paneer", name="Paneer", calories=265, protein=18, carbs=1.2, fats=21, serving_size=100, suggested_unit="grams"),
])


def portion_multiplier(quantity: float, unit: str, serving_size: Optional[float] = None) -> float:
    """Number of 100 g portions in ``quantity`` of ``unit``."""
    if quantity is None or quantity <= 0:
        raise InvalidInputError("Invalid Input: quantity must be positive")
    if unit in ("grams", "ml"):
        return quantity / 100
    if unit == "cups":
        return quantity * GRAMS_PER_CUP / 100
    if unit == "tbsp":
        return quantity * GRAMS_PER_TBSP / 100
    if unit == "pieces":
        return quantity * (serving_size or DEFAULT_PIECE_GRAMS) / 100
    if unit == "serving":
        return quantity * (serving_size or DEFAULT_SERVING_GRAMS) / 100
    raise InvalidInputError(f"Invalid Input: unknown unit '{unit}'")


def estimate_nutrition(food: Food, quantity: float, unit: str) -> NutritionEstimate:
    multiplier = portion_multiplier(quantity, unit, food.serving_size)
    return NutritionEstimate(
        calories=round_half_up(food.calories * multiplier),
        protein=round_to_tenth(food.protein * multiplier),
        carbs=round_to_tenth(food.carbs * multiplier),
        fats=round_to_tenth(food.fats * multiplier),
        fiber=round_to_tenth(food.fiber * multiplier),
    )


def get_food(key: str, foods: Mapping[str, Food] = DEFAULT_FOODS) -> Food:
    food = foods.get(key)
    if food is None:
        raise UnknownFoodError(key)
    return food


def search_foods(query: str, foods: Mapping[str, Food] = DEFAULT_FOODS, limit: int = 20) -> List[Food]:
    needle = (query or "").strip().lower()
    if len(needle) < MIN_SEARCH_LENGTH:
        return []
    matches = [f for f in foods.values() if needle in f.name.lower() or needle in f.key]
    matches.sort(key=lambda f: (not f.name.lower().startswith(needle), f.name))
    return matches[:limit]
