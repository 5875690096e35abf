from .catalog import DEFAULT_CATALOG, WorkoutType, build_catalog
from .calories import INTENSITY_FACTORS, estimate_calories
from .ranks import DEFAULT_RANK_TIERS, RankTier, compute_rank, compute_xp_reward, rank_progress
from .streaks import StreakState, apply_streak, correct_streak
from .weekly import DailyTotals, WeeklyReport, WeeklyTotals, aggregate_days, aggregate_week
from .insights import Goals, Insight, generate_insights
