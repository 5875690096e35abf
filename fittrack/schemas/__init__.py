from .user import UserCreate, UserUpdate, UserInDB, UserResponse, LeaderboardEntry
from .auth import Token, TokenWithUser, TokenData, LoginRequest, PasswordChange
from .workout import WorkoutCreate, WorkoutResponse, WorkoutCreateResponse, WorkoutEstimate, WorkoutSummary
from .meal import MealCreate, MealResponse, MealDayResponse, FoodResponse
from .progress import WeightUpdate, WeightHistory, ProgressHistory, PeriodSummary, UserStats
