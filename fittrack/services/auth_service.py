# services/auth_service.py
import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_

from fittrack.core.security import verify_password, get_password_hash
from fittrack.models.user import User
from fittrack.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    pass


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_user_by_username_or_email(self, username_or_email: str) -> Optional[User]:
        """Get user by username or email"""
        return self.db.query(User).filter(
            or_(
                User.username == username_or_email,
                User.email == username_or_email.lower()
            )
        ).first()

    def authenticate_user(self, username_or_email: str, password: str) -> Optional[User]:
        """Authenticate user with username/email and password"""
        user = self.get_user_by_username_or_email(username_or_email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def create_user(self, user_create: UserCreate) -> User:
        """Create a new user with default gamification state"""
        existing = self.db.query(User).filter(
            (User.email == user_create.email) | (User.username == user_create.username)
        ).first()
        if existing:
            raise DuplicateUserError("User already exists with this email or username")

        db_user = User(
            email=user_create.email,
            username=user_create.username,
            hashed_password=get_password_hash(user_create.password),
            height=user_create.height,
            weight=user_create.weight,
            age=user_create.age,
            gender=user_create.gender,
            body_fat=user_create.body_fat,
            goal=user_create.goal,
            xp=0,
            streak=0,
            last_workout_date=None,
        )
        self.db.add(db_user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(db_user)
        logger.info(f"Registered user {db_user.username} (id={db_user.id})")
        return db_user

    def change_password(self, user: User, current_password: str, new_password: str) -> bool:
        """Change user password after verifying current password"""
        if not verify_password(current_password, user.hashed_password):
            return False

        user.hashed_password = get_password_hash(new_password)
        user.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        return True
