"""Static workout reference data.

Each workout type is either duration based (calories per 30 minutes) or
count based (calories per repetition). The catalog is built once and handed
to the estimator, so tests and deployments can swap in their own tables.
"""

from types import MappingProxyType
from typing import Iterable, Literal, Mapping, Optional

from pydantic import BaseModel

from fittrack.core.exceptions import ConfigurationError

DURATION = "duration"
COUNT = "count"

InputMode = Literal["duration", "count"]


class WorkoutType(BaseModel):
    key: str
    label: str
    icon: str = "🏅"
    input_mode: InputMode
    calories_per_30_min: Optional[float] = None
    calories_per_rep: Optional[float] = None

    class Config:
        frozen = True

    @property
    def calories_per_10_reps(self) -> Optional[float]:
        if self.calories_per_rep is None:
            return None
        return round(self.calories_per_rep * 10, 1)


WorkoutCatalog = Mapping[str, WorkoutType]


def build_catalog(entries: Iterable[WorkoutType]) -> WorkoutCatalog:
    """Index workout types by key into a read-only mapping."""
    catalog = {}
    for entry in entries:
        if entry.key in catalog:
            raise ConfigurationError(f"Duplicate workout type '{entry.key}'")
        if entry.input_mode == DURATION and not entry.calories_per_30_min:
            raise ConfigurationError(f"Workout type '{entry.key}' needs calories_per_30_min")
        if entry.input_mode == COUNT and not entry.calories_per_rep:
            raise ConfigurationError(f"Workout type '{entry.key}' needs calories_per_rep")
        catalog[entry.key] = entry
    return MappingProxyType(catalog)


DEFAULT_CATALOG = build_catalog([
    # Duration based, kcal per 30 minutes at moderate intensity for ~70 kg
    WorkoutType(key="running", label="Running", icon="🏃", input_mode=DURATION, calories_per_30_min=300),
    WorkoutType(key="walking", label="Walking", icon="🚶", input_mode=DURATION, calories_per_30_min=140),
    WorkoutType(key="cycling", label="Cycling", icon="🚴", input_mode=DURATION, calories_per_30_min=250),
    WorkoutType(key="swimming", label="Swimming", icon="🏊", input_mode=DURATION, calories_per_30_min=280),
    WorkoutType(key="hiit", label="HIIT", icon="⚡", input_mode=DURATION, calories_per_30_min=350),
    WorkoutType(key="weightlifting", label="Weight Training", icon="🏋️", input_mode=DURATION, calories_per_30_min=180),
    WorkoutType(key="yoga", label="Yoga", icon="🧘", input_mode=DURATION, calories_per_30_min=120),
    WorkoutType(key="dancing", label="Dancing", icon="💃", input_mode=DURATION, calories_per_30_min=200),
    WorkoutType(key="jump_rope", label="Jump Rope", icon="🪢", input_mode=DURATION, calories_per_30_min=340),
    WorkoutType(key="rowing", label="Rowing", icon="🚣", input_mode=DURATION, calories_per_30_min=260),
    WorkoutType(key="hiking", label="Hiking", icon="🥾", input_mode=DURATION, calories_per_30_min=220),
    # Count based, kcal per repetition for ~70 kg
    WorkoutType(key="pushups", label="Push-ups", icon="💪", input_mode=COUNT, calories_per_rep=0.32),
    WorkoutType(key="squats", label="Squats", icon="🦵", input_mode=COUNT, calories_per_rep=0.32),
    WorkoutType(key="pullups", label="Pull-ups", icon="🧗", input_mode=COUNT, calories_per_rep=1.0),
    WorkoutType(key="situps", label="Sit-ups", icon="🔥", input_mode=COUNT, calories_per_rep=0.25),
    WorkoutType(key="burpees", label="Burpees", icon="🤸", input_mode=COUNT, calories_per_rep=0.5),
    WorkoutType(key="lunges", label="Lunges", icon="🦿", input_mode=COUNT, calories_per_rep=0.3),
    WorkoutType(key="jumping_jacks", label="Jumping Jacks", icon="⭐", input_mode=COUNT, calories_per_rep=0.2),
])
