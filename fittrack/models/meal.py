from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fittrack.core.database import Base


class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    food_key = Column(String(50), nullable=True)
    meal_type = Column(String(20), nullable=False, default="snack")
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(20), nullable=False, default="serving")
    calories = Column(Integer, nullable=False)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fats = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    logged_at = Column(DateTime(timezone=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="meals")

    def __repr__(self):
        return f"<Meal(id={self.id}, user_id={self.user_id}, name='{self.name}', calories={self.calories})>"
