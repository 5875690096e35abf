#!/usr/bin/env python3
"""
Tests for dashboard insights
"""

from datetime import date

from fittrack.engine.insights import Goals, generate_insights
from fittrack.engine.weekly import DailyTotals, WeeklyTotals

GOALS = Goals(daily_burn_goal=500, daily_calorie_goal=2000)


def today(intake=0, burned=0):
    return DailyTotals(day="Thu", date=date(2024, 3, 14), intake=intake, burned=burned, net=intake - burned)


def week(workouts=0):
    return WeeklyTotals(workout_count=workouts)


def categories(insights):
    return [(i.category, i.severity) for i in insights]


def test_idle_day_only_warns():
    insights = generate_insights(today(intake=0, burned=0), week(2), GOALS, streak=3)
    assert categories(insights) == [("daily_goal", "warning")]
    assert insights[0].message == "No workout today yet. Time to get moving!"


def test_goal_reached():
    insights = generate_insights(today(burned=500), week(0), GOALS, streak=0)
    assert categories(insights) == [("daily_goal", "success")]
    assert "500" in insights[0].message


def test_goal_in_progress_reports_remaining():
    insights = generate_insights(today(burned=320), week(0), GOALS, streak=0)
    assert categories(insights) == [("daily_goal", "info")]
    assert "180 kcal" in insights[0].message


def test_surplus_warning():
    insights = generate_insights(today(intake=1200, burned=200), week(0), GOALS, streak=0)
    assert ("calorie_balance", "warning") in categories(insights)
    assert "1000 kcal" in insights[1].message


def test_deficit_success():
    insights = generate_insights(today(intake=300, burned=700), week(0), GOALS, streak=0)
    assert categories(insights) == [("daily_goal", "success"), ("calorie_balance", "success")]


def test_balance_silent_without_intake():
    insights = generate_insights(today(intake=0, burned=700), week(0), GOALS, streak=0)
    assert "calorie_balance" not in [i.category for i in insights]


def test_balance_silent_inside_band():
    insights = generate_insights(today(intake=600, burned=400), week(0), GOALS, streak=0)
    assert "calorie_balance" not in [i.category for i in insights]


def test_weekly_consistency_levels():
    assert ("weekly_consistency", "info") in categories(generate_insights(today(), week(3), GOALS, 0))
    assert ("weekly_consistency", "success") in categories(generate_insights(today(), week(5), GOALS, 0))
    assert "weekly_consistency" not in [i.category for i in generate_insights(today(), week(2), GOALS, 0)]


def test_streak_celebration():
    assert ("streak", "success") in categories(generate_insights(today(), week(0), GOALS, 7))
    assert "streak" not in [i.category for i in generate_insights(today(), week(0), GOALS, 6)]


def test_insight_order_is_fixed():
    insights = generate_insights(today(intake=3000, burned=600), week(6), GOALS, streak=10)
    assert [i.category for i in insights] == ["daily_goal", "calorie_balance", "weekly_consistency", "streak"]


def test_idle_day_warns_even_with_zero_goal():
    insights = generate_insights(today(intake=0, burned=0), week(0), Goals(daily_burn_goal=0), streak=0)
    assert categories(insights) == [("daily_goal", "warning")]
    assert insights[0].message == "No workout today yet. Time to get moving!"
