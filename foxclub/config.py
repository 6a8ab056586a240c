"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import Dict, List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./foxclub.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # OAuth providers, disabled while the client id is empty
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = "http://localhost:3000/auth/callback/google"
    GITHUB_CLIENT_ID: str = ""
    GITHUB_CLIENT_SECRET: str = ""
    GITHUB_REDIRECT_URI: str = "http://localhost:3000/auth/callback/github"
    OAUTH_TIMEOUT_SECONDS: float = 10.0

    def oauth_clients(self) -> Dict[str, Dict[str, str]]:
        return {
            "google": {
                "client_id": str(self.GOOGLE_CLIENT_ID or "").strip(),
                "client_secret": str(self.GOOGLE_CLIENT_SECRET or "").strip(),
                "redirect_uri": str(self.GOOGLE_REDIRECT_URI or "").strip(),
            },
            "github": {
                "client_id": str(self.GITHUB_CLIENT_ID or "").strip(),
                "client_secret": str(self.GITHUB_CLIENT_SECRET or "").strip(),
                "redirect_uri": str(self.GITHUB_REDIRECT_URI or "").strip(),
            },
        }

    class Config:
        # 실행 cwd와 무관하게 프로젝트 루트의 .env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
