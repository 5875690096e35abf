"""XP rewards and rank tiers."""

from typing import Optional, Sequence

from pydantic import BaseModel

from fittrack.core.exceptions import ConfigurationError
from fittrack.utils.rounding import round_half_up

XP_FLOOR = 5
XP_DIVISOR = 2


class RankTier(BaseModel):
    rank: str
    min_xp: int

    class Config:
        frozen = True


DEFAULT_RANK_TIERS = (
    RankTier(rank="E", min_xp=0),
    RankTier(rank="D", min_xp=1000),
    RankTier(rank="C", min_xp=2500),
    RankTier(rank="B", min_xp=5000),
    RankTier(rank="A", min_xp=10000),
    RankTier(rank="S", min_xp=20000),
    RankTier(rank="NATIONAL", min_xp=50000),
)


class RankProgress(BaseModel):
    rank: str
    min_xp: int
    xp: int
    next_rank: Optional[str] = None
    next_rank_xp: Optional[int] = None
    xp_to_next: int = 0
    progress_percent: float = 100.0


def validate_tier_table(tiers: Sequence[RankTier]) -> None:
    if not tiers:
        raise ConfigurationError("Rank tier table is empty")
    if tiers[0].min_xp != 0:
        raise ConfigurationError("Rank tier table must start with a zero-threshold base tier")
    for lower, upper in zip(tiers, tiers[1:]):
        if upper.min_xp <= lower.min_xp:
            raise ConfigurationError(
                f"Rank thresholds must be strictly increasing ({lower.rank}={lower.min_xp}, "
                f"{upper.rank}={upper.min_xp})"
            )


def _tier_index(xp: int, tiers: Sequence[RankTier]) -> int:
    validate_tier_table(tiers)
    index = 0
    for i, tier in enumerate(tiers):
        if xp >= tier.min_xp:
            index = i
        else:
            break
    return index


def compute_rank(xp: int, tiers: Sequence[RankTier] = DEFAULT_RANK_TIERS) -> str:
    """Label of the highest tier whose threshold ``xp`` meets or exceeds."""
    return tiers[_tier_index(xp, tiers)].rank


def rank_progress(xp: int, tiers: Sequence[RankTier] = DEFAULT_RANK_TIERS) -> RankProgress:
    index = _tier_index(xp, tiers)
    current = tiers[index]
    if index + 1 >= len(tiers):
        return RankProgress(rank=current.rank, min_xp=current.min_xp, xp=xp)

    upcoming = tiers[index + 1]
    span = upcoming.min_xp - current.min_xp
    earned = max(0, xp - current.min_xp)
    return RankProgress(
        rank=current.rank,
        min_xp=current.min_xp,
        xp=xp,
        next_rank=upcoming.rank,
        next_rank_xp=upcoming.min_xp,
        xp_to_next=upcoming.min_xp - max(xp, current.min_xp),
        progress_percent=round(earned / span * 100, 1),
    )


def compute_xp_reward(calories: float, *, floor: int = XP_FLOOR, divisor: float = XP_DIVISOR) -> int:
    """XP granted for a workout: half the calories, never less than ``floor``."""
    if divisor <= 0:
        raise ConfigurationError("XP divisor must be positive")
    return max(floor, round_half_up(calories / divisor))
