"""Rule based observations for the dashboard.

Each category is checked on its own and contributes at most one insight.
A category whose conditions are not met stays silent.
"""

from typing import List, Literal

from pydantic import BaseModel

from fittrack.engine.weekly import DailyTotals, WeeklyTotals

SURPLUS_WARNING_KCAL = 500
DEFICIT_SUCCESS_KCAL = 300
WEEKLY_WORKOUTS_GREAT = 5
WEEKLY_WORKOUTS_GOOD = 3
STREAK_CELEBRATE_DAYS = 7

Severity = Literal["success", "info", "warning"]


class Goals(BaseModel):
    daily_burn_goal: int = 500
    daily_calorie_goal: int = 2000


class Insight(BaseModel):
    severity: Severity
    category: str
    message: str


def _goal_progress(today: DailyTotals, goals: Goals) -> List[Insight]:
    burned = today.burned
    # An idle day warns whatever the goal is
    if burned <= 0:
        return [Insight(severity="warning", category="daily_goal",
                        message="No workout today yet. Time to get moving!")]
    if burned >= goals.daily_burn_goal:
        return [Insight(severity="success", category="daily_goal",
                        message=f"Goal crushed! You burned {burned} kcal today!")]
    remaining = goals.daily_burn_goal - burned
    return [Insight(severity="info", category="daily_goal",
                    message=f"Keep going! {remaining} kcal more to hit your daily goal")]


def _calorie_balance(today: DailyTotals) -> List[Insight]:
    if today.intake <= 0 or today.burned <= 0:
        return []
    balance = today.intake - today.burned
    if balance > SURPLUS_WARNING_KCAL:
        return [Insight(severity="warning", category="calorie_balance",
                        message=f"Calorie surplus of {balance} kcal today. Consider a workout!")]
    if balance < -DEFICIT_SUCCESS_KCAL:
        return [Insight(severity="success", category="calorie_balance",
                        message=f"Great deficit! {abs(balance)} kcal burned vs intake")]
    return []


def _weekly_consistency(week: WeeklyTotals) -> List[Insight]:
    workouts = week.workout_count
    if workouts >= WEEKLY_WORKOUTS_GREAT:
        return [Insight(severity="success", category="weekly_consistency",
                        message=f"Excellent! {workouts} workouts this week. You're on fire!")]
    if workouts >= WEEKLY_WORKOUTS_GOOD:
        return [Insight(severity="info", category="weekly_consistency",
                        message=f"Good week with {workouts} workouts. Try for {WEEKLY_WORKOUTS_GREAT} next week!")]
    return []


def _streak(streak: int) -> List[Insight]:
    if streak >= STREAK_CELEBRATE_DAYS:
        return [Insight(severity="success", category="streak",
                        message=f"{streak} day streak! You're unstoppable!")]
    return []


def generate_insights(
    today_totals: DailyTotals,
    weekly_totals: WeeklyTotals,
    goals: Goals,
    streak: int,
) -> List[Insight]:
    return (
        _goal_progress(today_totals, goals)
        + _calorie_balance(today_totals)
        + _weekly_consistency(weekly_totals)
        + _streak(streak)
    )
