from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from foxclub.database import get_db
from foxclub.errors import Forbidden, Unauthorized
from foxclub.models.user import User
from foxclub.config import settings
from foxclub.utils.permissions import can_view_profile, is_admin

security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        raise Unauthorized("Invalid or expired token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise Unauthorized("Authentication required")
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise Unauthorized("Invalid token payload")
    try:
        user_pk = int(user_id)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token payload")

    user = db.query(User).filter(User.user_id == user_pk).first()
    if not user:
        raise Unauthorized("User not found")
    return user


def require_authenticated(current_user: User = Depends(get_current_user)) -> User:
    return current_user


def require_administrator(current_user: User = Depends(get_current_user)) -> User:
    if not is_admin(current_user):
        raise Forbidden("Administrator access required")
    return current_user


def ensure_can_view_profile(viewer: User, profile_user_id: int):
    if not can_view_profile(viewer, profile_user_id):
        raise Forbidden("You can only view your own profile")
