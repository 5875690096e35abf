from fastapi import APIRouter
from . import auth, users, workouts, meals, progress

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(meals.router, prefix="/meals", tags=["meals"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
