"""Daily and weekly activity aggregation.

Workouts are expected to expose ``logged_at``, ``calories_burned``,
``duration_minutes`` and ``workout_type``; meals expose ``logged_at``,
``calories`` and optionally ``protein``, ``carbs``, ``fats`` and ``fiber``.
ORM rows and plain objects both work.
"""

from collections import defaultdict
from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from fittrack.utils.dates import to_local_date
from fittrack.utils.rounding import round_half_up, round_to_tenth

DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WINDOW_DAYS = 7


class DailyTotals(BaseModel):
    day: str
    date: date
    intake: int = 0
    burned: int = 0
    net: int = 0
    workout_count: int = 0
    total_duration_minutes: int = 0


class DayDetail(DailyTotals):
    meal_count: int = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    fiber: float = 0


class WeeklyTotals(BaseModel):
    intake: int = 0
    burned: int = 0
    net: int = 0
    workout_count: int = 0
    total_duration_minutes: int = 0
    avg_daily_intake: int = 0
    avg_daily_burn: int = 0


class WeeklyReport(BaseModel):
    start_date: date
    end_date: date
    days: List[DailyTotals]
    totals: WeeklyTotals


class WorkoutTypeBreakdown(BaseModel):
    workout_type: str
    count: int
    calories: int
    duration_minutes: int


def _number(record, name: str):
    return getattr(record, name, None) or 0


def _bucket(records, start: date, end: date, tz: Optional[tzinfo]) -> Dict[date, list]:
    buckets = defaultdict(list)
    for record in records:
        day = to_local_date(record.logged_at, tz)
        if start <= day <= end:
            buckets[day].append(record)
    return buckets


def _totals_for_day(day: date, workouts: list, meals: list) -> DailyTotals:
    intake = sum(int(_number(meal, "calories")) for meal in meals)
    burned = sum(int(_number(workout, "calories_burned")) for workout in workouts)
    return DailyTotals(
        day=DAY_LABELS[day.weekday()],
        date=day,
        intake=intake,
        burned=burned,
        net=intake - burned,
        workout_count=len(workouts),
        total_duration_minutes=sum(int(_number(w, "duration_minutes")) for w in workouts),
    )


def aggregate_days(
    workouts: Iterable,
    meals: Iterable,
    start: date,
    end: date,
    tz: Optional[tzinfo] = None,
) -> List[DailyTotals]:
    """Per-day totals for every day in ``start..end`` inclusive, oldest first."""
    if end < start:
        return []
    workout_buckets = _bucket(workouts, start, end, tz)
    meal_buckets = _bucket(meals, start, end, tz)
    days = []
    current = start
    while current <= end:
        days.append(_totals_for_day(current, workout_buckets.get(current, []), meal_buckets.get(current, [])))
        current += timedelta(days=1)
    return days


def aggregate_day(workouts: Iterable, meals: Iterable, day: date, tz: Optional[tzinfo] = None) -> DayDetail:
    """Totals for a single day including macros."""
    day_workouts = _bucket(workouts, day, day, tz).get(day, [])
    day_meals = _bucket(meals, day, day, tz).get(day, [])
    totals = _totals_for_day(day, day_workouts, day_meals)
    return DayDetail(
        **totals.model_dump(),
        meal_count=len(day_meals),
        protein=round_to_tenth(sum(float(_number(m, "protein")) for m in day_meals)),
        carbs=round_to_tenth(sum(float(_number(m, "carbs")) for m in day_meals)),
        fats=round_to_tenth(sum(float(_number(m, "fats")) for m in day_meals)),
        fiber=round_to_tenth(sum(float(_number(m, "fiber")) for m in day_meals)),
    )


def sum_totals(days: List[DailyTotals]) -> WeeklyTotals:
    intake = sum(d.intake for d in days)
    burned = sum(d.burned for d in days)
    count = len(days) or 1
    return WeeklyTotals(
        intake=intake,
        burned=burned,
        net=intake - burned,
        workout_count=sum(d.workout_count for d in days),
        total_duration_minutes=sum(d.total_duration_minutes for d in days),
        avg_daily_intake=round_half_up(intake / count),
        avg_daily_burn=round_half_up(burned / count),
    )


def aggregate_week(
    workouts: Iterable,
    meals: Iterable,
    anchor_date: date,
    tz: Optional[tzinfo] = None,
) -> WeeklyReport:
    """Bucket the 7 days ending on ``anchor_date`` into Mon..Sun slots.

    Each weekday occurs exactly once in the window, so the buckets are
    returned in Mon..Sun order with their concrete dates attached.
    """
    start = anchor_date - timedelta(days=WINDOW_DAYS - 1)
    days = aggregate_days(workouts, meals, start, anchor_date, tz)
    days.sort(key=lambda d: d.date.weekday())
    return WeeklyReport(start_date=start, end_date=anchor_date, days=days, totals=sum_totals(days))


def workout_breakdown(workouts: Iterable) -> List[WorkoutTypeBreakdown]:
    """Count, calories and minutes per workout type, most calories first."""
    grouped = {}
    for workout in workouts:
        entry = grouped.setdefault(workout.workout_type, [0, 0, 0])
        entry[0] += 1
        entry[1] += int(_number(workout, "calories_burned"))
        entry[2] += int(_number(workout, "duration_minutes"))
    breakdown = [
        WorkoutTypeBreakdown(workout_type=key, count=count, calories=calories, duration_minutes=minutes)
        for key, (count, calories, minutes) in grouped.items()
    ]
    breakdown.sort(key=lambda b: (-b.calories, b.workout_type))
    return breakdown
