from typing import Optional

from pydantic import BaseModel

from fittrack.core.exceptions import InvalidInputError


class BodySummary(BaseModel):
    bmi: float
    bmi_category: str
    weight: float
    goal_weight: Optional[float] = None
    weight_to_goal: Optional[float] = None
    direction: Optional[str] = None  # "lose", "gain" or "reached"


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
        raise InvalidInputError("Invalid Input: weight and height must be positive")
    return round(weight_kg / (height_cm / 100) ** 2, 1)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def body_summary(weight_kg: float, height_cm: float, goal_weight: Optional[float] = None) -> BodySummary:
    bmi = compute_bmi(weight_kg, height_cm)
    summary = BodySummary(bmi=bmi, bmi_category=bmi_category(bmi), weight=weight_kg, goal_weight=goal_weight)
    if goal_weight is not None:
        diff = round(weight_kg - goal_weight, 1)
        summary.weight_to_goal = abs(diff)
        if diff > 0:
            summary.direction = "lose"
        elif diff < 0:
            summary.direction = "gain"
        else:
            summary.direction = "reached"
    return summary
