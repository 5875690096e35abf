# api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from fittrack.core.config import settings
from fittrack.core.database import get_db
from fittrack.core.security import create_access_token
from fittrack.api.deps import get_current_user
from fittrack.schemas.auth import TokenWithUser, LoginRequest, PasswordChange
from fittrack.schemas.user import UserCreate, UserResponse
from fittrack.services.auth_service import AuthService, DuplicateUserError
from fittrack.services.user_service import UserService, to_user_response
from fittrack.models.user import User
from fittrack.utils.rate_limiter import rate_limit

router = APIRouter()

register_limit = rate_limit("register", settings.register_rate_limit, settings.rate_limit_window_seconds)
login_limit = rate_limit("login", settings.login_rate_limit, settings.rate_limit_window_seconds)


def _token_response(user: User) -> TokenWithUser:
    access_token = create_access_token(subject=user.username)
    return TokenWithUser(access_token=access_token, token_type="bearer", user=to_user_response(user))


def _login(db: Session, username_or_email: str, password: str) -> TokenWithUser:
    auth_service = AuthService(db)
    user = auth_service.authenticate_user(username_or_email, password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username/email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # A user who skipped more than a day loses the streak on sign-in
    UserService(db).refresh_streak(user)
    return _token_response(user)


@router.post("/register", response_model=TokenWithUser, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(register_limit)])
def register(user_create: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return an access token"""
    auth_service = AuthService(db)
    try:
        user = auth_service.create_user(user_create)
    except DuplicateUserError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return _token_response(user)


@router.post("/login", response_model=TokenWithUser, dependencies=[Depends(login_limit)])
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Login with form data (OAuth2 compatible) - supports username or email"""
    return _login(db, form_data.username, form_data.password)


@router.post("/login-json", response_model=TokenWithUser, dependencies=[Depends(login_limit)])
def login_json(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Login with JSON data - supports username or email"""
    return _login(db, login_data.username_or_email, login_data.password)


@router.post("/change-password")
def change_password(
    password_change: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change password for authenticated user"""
    auth_service = AuthService(db)

    success = auth_service.change_password(
        current_user,
        password_change.current_password,
        password_change.new_password
    )

    if not success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    return {"message": "Password changed successfully"}


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get current user profile with rank"""
    UserService(db).refresh_streak(current_user)
    return to_user_response(current_user)
