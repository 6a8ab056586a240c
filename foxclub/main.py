"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 핸들러, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foxclub.config import settings
from foxclub.database import Base, engine
from foxclub.errors import register_exception_handlers
import foxclub.models  # noqa: F401 - 모델 import로 metadata 등록
from foxclub.routers import (
    account, admin_notes, admin_question_families, admin_questions, admin_users, auth, form, users,
)

logging.basicConfig(
    level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fox Club",
    description="Fox Club 회원 설문 및 관리자 운영 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register all routers
app.include_router(auth.router)
app.include_router(account.router)
app.include_router(users.router)
app.include_router(form.router)
app.include_router(admin_question_families.router)
app.include_router(admin_questions.router)
app.include_router(admin_users.router)
app.include_router(admin_notes.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)
    logger.info("[startup] schema ready on %s", engine.dialect.name)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Fox Club"}
