from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fittrack.core.database import Base


class Workout(Base):
    """A logged workout. Calories and XP are fixed when the row is created."""

    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_type = Column(String(50), nullable=False)
    input_mode = Column(String(10), nullable=False)  # duration | count
    duration_minutes = Column(Integer, nullable=False, default=0)
    reps = Column(Integer, nullable=True)
    sets = Column(Integer, nullable=True)
    intensity = Column(String(10), nullable=False, default="moderate")
    calories_burned = Column(Integer, nullable=False)
    xp_earned = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    logged_at = Column(DateTime(timezone=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="workouts")

    def __repr__(self):
        return f"<Workout(id={self.id}, user_id={self.user_id}, type='{self.workout_type}', calories={self.calories_burned})>"
