"""OAuth(Google/GitHub) 로그인 서비스입니다. 인가 코드 교환, 프로필 조회, 계정 조회와 생성을 담당합니다."""

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
from sqlalchemy import func
from sqlalchemy.orm import Session

from foxclub.config import settings
from foxclub.errors import Unauthorized, ValidationError
from foxclub.models.user import User, UserRole

logger = logging.getLogger(__name__)


class OAuthProvider:
    name = ""
    auth_url = ""
    token_url = ""
    userinfo_url = ""
    scope = ""

    def __init__(self):
        client = settings.oauth_clients().get(self.name, {})
        self.client_id = client.get("client_id", "")
        self.client_secret = client.get("client_secret", "")
        self.redirect_uri = client.get("redirect_uri", "")

    @property
    def enabled(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorization_params(self, state: Optional[str]) -> Dict[str, str]:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
        }
        if state:
            params["state"] = state
        return params

    def get_authorization_url(self, state: Optional[str] = None) -> str:
        return f"{self.auth_url}?{urlencode(self.authorization_params(state))}"

    def exchange_code(self, code: str) -> str:
        response = httpx.post(
            self.token_url,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": self.redirect_uri,
            },
            headers={"Accept": "application/json"},
            timeout=settings.OAUTH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        access_token = response.json().get("access_token")
        if not access_token:
            raise Unauthorized("OAuth provider returned no access token")
        return access_token

    def _get_json(self, url: str, access_token: str) -> Any:
        response = httpx.get(
            url,
            headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
            timeout=settings.OAUTH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()

    def fetch_profile(self, access_token: str) -> Dict[str, Optional[str]]:
        raise NotImplementedError


class GoogleOAuthProvider(OAuthProvider):
    name = "google"
    auth_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    userinfo_url = "https://www.googleapis.com/oauth2/v3/userinfo"
    scope = "openid email profile"

    def authorization_params(self, state: Optional[str]) -> Dict[str, str]:
        params = super().authorization_params(state)
        params["response_type"] = "code"
        return params

    def fetch_profile(self, access_token: str) -> Dict[str, Any]:
        info = self._get_json(self.userinfo_url, access_token)
        verified = info.get("email_verified", False)
        if isinstance(verified, str):
            verified = verified.lower() == "true"
        return {
            "subject": str(info.get("sub") or ""),
            "email": info.get("email"),
            "email_verified": bool(verified),
            "login": None,
            "first_name": info.get("given_name"),
            "last_name": info.get("family_name"),
        }


class GitHubOAuthProvider(OAuthProvider):
    name = "github"
    auth_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    userinfo_url = "https://api.github.com/user"
    emails_url = "https://api.github.com/user/emails"
    scope = "read:user user:email"

    @staticmethod
    def _primary_email(emails: list) -> Optional[str]:
        for row in emails:
            if row.get("primary") and row.get("verified"):
                return row.get("email")
        for row in emails:
            if row.get("verified"):
                return row.get("email")
        return None

    def fetch_profile(self, access_token: str) -> Dict[str, Any]:
        info = self._get_json(self.userinfo_url, access_token)
        # /user의 공개 email에는 검증 여부가 없으므로 /user/emails만 신뢰한다.
        email = self._primary_email(self._get_json(self.emails_url, access_token) or [])
        name = str(info.get("name") or "").strip()
        first_name, _, last_name = name.partition(" ")
        return {
            "subject": str(info.get("id") or ""),
            "email": email,
            "email_verified": bool(email),
            "login": info.get("login"),
            "first_name": first_name or None,
            "last_name": last_name or None,
        }


PROVIDERS = {
    "google": GoogleOAuthProvider,
    "github": GitHubOAuthProvider,
}


def get_provider(name: str) -> OAuthProvider:
    provider_cls = PROVIDERS.get(str(name or "").strip().lower())
    if provider_cls is None:
        raise ValidationError(f"Unknown OAuth provider '{name}'")
    provider = provider_cls()
    if not provider.enabled:
        raise ValidationError(f"OAuth provider '{provider.name}' is not configured")
    return provider


def _available_pseudo(db: Session, seed: str) -> str:
    base = re.sub(r"[^A-Za-z0-9_.-]", "", seed or "")[:40] or "member"
    if len(base) < 3:
        base = f"{base}_fox"
    candidate = base
    suffix = 1
    while db.query(User.user_id).filter(func.lower(User.pseudo) == candidate.lower()).first():
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def login_with_code(db: Session, provider_name: str, code: str) -> User:
    provider = get_provider(provider_name)
    try:
        access_token = provider.exchange_code(code)
        profile = provider.fetch_profile(access_token)
    except httpx.HTTPError as exc:
        logger.warning("[auth] %s oauth exchange failed: %s", provider.name, exc)
        raise Unauthorized("OAuth authentication failed") from exc

    subject = profile.get("subject")
    if not subject:
        raise Unauthorized("OAuth provider returned no user id")
    # 검증되지 않은 email은 조회와 생성 모두에 사용하지 않는다.
    email = None
    if profile.get("email_verified"):
        email = str(profile.get("email") or "").strip().lower() or None

    user = (
        db.query(User)
        .filter(User.oauth_provider == provider.name, User.oauth_subject == subject)
        .first()
    )
    if not user and email:
        # 같은 email의 기존 계정에는 자동으로 연결하지 않는다.
        existing = db.query(User.user_id).filter(func.lower(User.email) == email).first()
        if existing:
            logger.warning("[auth] refused %s sign-in for email of user %s", provider.name, existing.user_id)
            raise Unauthorized("An account with this email already exists")
    if not user:
        seed = profile.get("login") or (email.split("@")[0] if email else f"{provider.name}_{subject}")
        user = User(
            pseudo=_available_pseudo(db, seed),
            email=email,
            first_name=profile.get("first_name"),
            last_name=profile.get("last_name"),
            password_hash=None,
            role=UserRole.USER,
            approved=False,
            oauth_provider=provider.name,
            oauth_subject=subject,
        )
        db.add(user)
        logger.info("[auth] created pending user from %s oauth", provider.name)
    db.commit()
    db.refresh(user)
    return user
