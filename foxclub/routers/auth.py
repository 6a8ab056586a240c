"""Auth 기능 API 라우터입니다. 로그인, 회원가입, 현재 사용자 조회, OAuth 로그인을 제공합니다."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_authenticated
from foxclub.models.user import User
from foxclub.schemas.user import (
    LoginRequest,
    MeOut,
    OAuthAuthorizeOut,
    OAuthCallbackRequest,
    RegisterRequest,
    TokenResponse,
)
from foxclub.services import auth_service, oauth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, request.identifier, request.password)
    return auth_service.token_response(user)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register(db, request)
    return auth_service.token_response(user)


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(require_authenticated)):
    return auth_service.to_me(current_user)


@router.get("/oauth/{provider}/authorize", response_model=OAuthAuthorizeOut)
def oauth_authorize(provider: str, state: Optional[str] = None):
    return {"url": oauth_service.get_provider(provider).get_authorization_url(state)}


@router.post("/oauth/{provider}/callback", response_model=TokenResponse)
def oauth_callback(provider: str, request: OAuthCallbackRequest, db: Session = Depends(get_db)):
    user = oauth_service.login_with_code(db, provider, request.code)
    return auth_service.token_response(user)
