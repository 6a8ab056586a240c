"""관리자용 질문 패밀리 API 라우터입니다."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_administrator
from foxclub.models.question import QuestionType
from foxclub.models.user import User
from foxclub.schemas.common import SuccessOut
from foxclub.schemas.question import (
    QuestionFamilyCreate,
    QuestionFamilyDetailOut,
    QuestionFamilyListOut,
    QuestionFamilyOut,
    QuestionFamilyUpdate,
)
from foxclub.services import question_service

router = APIRouter(prefix="/api/admin/question-families", tags=["admin-question-families"])


@router.get("", response_model=QuestionFamilyListOut)
def list_families(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[QuestionType] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.list_families(db, page=page, limit=limit, family_type=type, search=search)


@router.post("", response_model=QuestionFamilyOut, status_code=status.HTTP_201_CREATED)
def create_family(
    data: QuestionFamilyCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.create_family(db, data)


@router.get("/{family_id}", response_model=QuestionFamilyDetailOut)
def get_family(
    family_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.get_family_detail(db, family_id)


@router.patch("/{family_id}", response_model=QuestionFamilyOut)
def update_family(
    family_id: int,
    data: QuestionFamilyUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return question_service.update_family(db, family_id, data)


@router.delete("/{family_id}", response_model=SuccessOut)
def delete_family(
    family_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    question_service.delete_family(db, family_id)
    return {"success": True}
