import logging
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from fittrack.core.database import get_db
from fittrack.core.security import decode_access_token
from fittrack.models.user import User
from fittrack.schemas.auth import TokenData

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise _unauthorized("Not authorized to access this route. No token provided.")
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired. Please log in again.")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        raise _unauthorized("Not authorized. Token is invalid.")

    token_data = TokenData(username=payload.get("sub"))
    if not token_data.username:
        raise _unauthorized("Not authorized. Token is invalid.")

    user = db.query(User).filter(User.username == token_data.username).first()
    if user is None or not user.is_active:
        raise _unauthorized("User not found. Token may be invalid.")
    return user
