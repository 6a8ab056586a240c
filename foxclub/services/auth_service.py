"""Auth Service 도메인 서비스 레이어입니다. 자격 증명 검증, 토큰 발급, 비밀번호 관리를 담당합니다."""

import logging
import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from foxclub.config import settings
from foxclub.errors import ConflictError, Unauthorized, ValidationError
from foxclub.models.user import User, UserRole
from foxclub.schemas.user import ChangePasswordRequest, MeOut, RegisterRequest
from foxclub.utils.permissions import can_administer

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789!@#$"
GENERATED_PASSWORD_LENGTH = 12


def hash_password(password: str) -> str:
    # bcrypt는 72바이트까지만 사용한다.
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        return False


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def create_access_token(user_id: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def to_me(user: User) -> dict:
    payload = MeOut.model_validate(user).model_dump()
    payload["can_administer"] = can_administer(user.role)
    return payload


def token_response(user: User) -> dict:
    return {
        "access_token": create_access_token(user.user_id),
        "token_type": "bearer",
        "user": to_me(user),
    }


def authenticate(db: Session, identifier: str, password: str) -> User:
    key = identifier.strip().lower()
    user = (
        db.query(User)
        .filter(or_(func.lower(User.email) == key, func.lower(User.pseudo) == key))
        .first()
    )
    if not user or not verify_password(password, user.password_hash):
        logger.info("[auth] failed login for %s", identifier)
        raise Unauthorized("Invalid credentials")
    logger.info("[auth] user %s signed in", user.user_id)
    return user


def ensure_unique_identity(db: Session, pseudo: str | None, email: str | None, exclude_user_id: int | None = None):
    if pseudo:
        query = db.query(User).filter(func.lower(User.pseudo) == pseudo.strip().lower())
        if exclude_user_id is not None:
            query = query.filter(User.user_id != exclude_user_id)
        if query.first():
            raise ConflictError("Pseudo already taken")
    if email:
        query = db.query(User).filter(func.lower(User.email) == email.strip().lower())
        if exclude_user_id is not None:
            query = query.filter(User.user_id != exclude_user_id)
        if query.first():
            raise ConflictError("Email already registered")


def register(db: Session, data: RegisterRequest) -> User:
    ensure_unique_identity(db, data.pseudo, data.email)
    user = User(
        pseudo=data.pseudo.strip(),
        email=data.email.strip().lower() if data.email else None,
        first_name=data.first_name,
        last_name=data.last_name,
        password_hash=hash_password(data.password),
        role=UserRole.USER,
        approved=False,
        must_change_password=False,
    )
    user.types = []
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("[auth] registered user %s (pending approval)", user.user_id)
    return user


def change_own_password(db: Session, current_user: User, data: ChangePasswordRequest):
    if not current_user.password_hash:
        raise ValidationError("No local password for this account")
    if not verify_password(data.old_password, current_user.password_hash):
        raise Unauthorized("Invalid password")
    current_user.password_hash = hash_password(data.new_password)
    current_user.must_change_password = False
    db.commit()
    logger.info("[auth] user %s changed password", current_user.user_id)
