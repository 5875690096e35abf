# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, Date, Boolean, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fittrack.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)

    # Body metrics
    height = Column(Float, nullable=False, default=170)  # cm
    weight = Column(Float, nullable=False, default=70)  # kg
    age = Column(Integer, nullable=True, default=25)
    gender = Column(String(10), nullable=False, default="male")
    body_fat = Column(Float, nullable=False, default=20)  # percent

    # Goals
    goal = Column(String(20), nullable=False, default="maintenance")
    goal_weight = Column(Float, nullable=True)
    daily_calorie_goal = Column(Integer, nullable=False, default=2000)
    daily_burn_goal = Column(Integer, nullable=False, default=500)

    # Gamification
    xp = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    last_workout_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    workouts = relationship("Workout", back_populates="user", cascade="all, delete-orphan")
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")
    weight_logs = relationship("WeightLog", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', xp={self.xp}, streak={self.streak})>"
