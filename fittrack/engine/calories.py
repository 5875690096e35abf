"""Calorie burn estimation for logged workouts."""

from types import MappingProxyType
from typing import Optional

from fittrack.core.exceptions import InvalidInputError, UnknownActivityTypeError
from fittrack.engine.catalog import COUNT, DEFAULT_CATALOG, DURATION, WorkoutCatalog
from fittrack.utils.rounding import round_half_up

INTENSITY_FACTORS = MappingProxyType({
    "low": 0.8,
    "moderate": 1.0,
    "high": 1.2,
})

REFERENCE_WEIGHT_KG = 70.0


def intensity_factor(intensity: str) -> float:
    try:
        return INTENSITY_FACTORS[intensity]
    except KeyError:
        raise InvalidInputError(f"Invalid Input: unknown intensity '{intensity}'")


def _require_positive(name: str, value) -> float:
    if value is None:
        raise InvalidInputError(f"Invalid Input: {name} is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Invalid Input: {name} must be a number")
    if value <= 0:
        raise InvalidInputError(f"Invalid Input: {name} must be positive")
    return value


def estimate_calories(
    activity_type: str,
    *,
    duration_minutes: Optional[float] = None,
    reps: Optional[int] = None,
    sets: Optional[int] = None,
    intensity: str = "moderate",
    user_weight_kg: float = REFERENCE_WEIGHT_KG,
    input_mode: Optional[str] = None,
    catalog: WorkoutCatalog = DEFAULT_CATALOG,
    reference_weight_kg: float = REFERENCE_WEIGHT_KG,
) -> int:
    """Estimate calories burned by one workout.

    Duration based types scale the 30 minute rate by duration and intensity.
    Count based types scale the per-rep rate by total reps, intensity and the
    ratio of the user's weight to ``reference_weight_kg``. ``sets`` defaults
    to a single set. If ``input_mode`` is given it must agree with the
    catalog entry.

    Raises ``UnknownActivityTypeError`` for types missing from the catalog
    and ``InvalidInputError`` for missing or malformed fields.
    """
    workout_type = catalog.get(activity_type)
    if workout_type is None:
        raise UnknownActivityTypeError(activity_type)

    if input_mode is not None and input_mode != workout_type.input_mode:
        raise InvalidInputError(
            f"Invalid Input: '{activity_type}' is {workout_type.input_mode} based, not {input_mode}"
        )

    factor = intensity_factor(intensity)

    if workout_type.input_mode == DURATION:
        minutes = _require_positive("duration_minutes", duration_minutes)
        calories = workout_type.calories_per_30_min * (minutes / 30) * factor
    elif workout_type.input_mode == COUNT:
        rep_count = _require_positive("reps", reps)
        set_count = 1 if sets is None else _require_positive("sets", sets)
        weight = _require_positive("user_weight_kg", user_weight_kg)
        calories = (
            workout_type.calories_per_rep
            * rep_count
            * set_count
            * factor
            * (weight / reference_weight_kg)
        )
    else:
        raise InvalidInputError(f"Invalid Input: unsupported input mode '{workout_type.input_mode}'")

    return round_half_up(calories)
