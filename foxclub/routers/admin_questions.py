"""관리자용 질문 API 라우터입니다."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_administrator
from foxclub.models.user import User
from foxclub.schemas.common import SuccessOut
from foxclub.schemas.question import QuestionCreate, QuestionDetailOut, QuestionListOut, QuestionUpdate
from foxclub.services import question_service

router = APIRouter(prefix="/api/admin/questions", tags=["admin-questions"])


@router.get("", response_model=QuestionListOut)
def list_questions(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    family_id: Optional[int] = Query(None, alias="familyId"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.list_questions(db, page=page, limit=limit, family_id=family_id, search=search)


@router.post("", response_model=QuestionDetailOut, status_code=status.HTTP_201_CREATED)
def create_question(
    data: QuestionCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.create_question(db, data)


@router.get("/{question_id}", response_model=QuestionDetailOut)
def get_question(
    question_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.get_question_detail(db, question_id)


@router.patch("/{question_id}", response_model=QuestionDetailOut)
def update_question(
    question_id: int,
    data: QuestionUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.update_question(db, question_id, data)


@router.delete("/{question_id}", response_model=SuccessOut)
def delete_question(
    question_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    question_service.delete_question(db, question_id)
    return {"success": True}
