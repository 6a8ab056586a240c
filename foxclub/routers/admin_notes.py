"""관리자 메모 API 라우터입니다. 메모는 관리자 엔드포인트로만 노출됩니다."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_administrator
from foxclub.models.user import User
from foxclub.schemas.admin_note import AdminNoteCreate, AdminNoteListOut, AdminNoteOut, AdminNoteUpdate
from foxclub.schemas.common import SuccessOut
from foxclub.services import note_service

router = APIRouter(prefix="/api/admin/notes", tags=["admin-notes"])


@router.get("", response_model=AdminNoteListOut)
def list_notes(
    user_id: int = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return {"data": note_service.list_notes(db, user_id)}


@router.post("", response_model=AdminNoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    data: AdminNoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_administrator),
):
    return note_service.create_note(db, data, current_user)


@router.patch("/{note_id}", response_model=AdminNoteOut)
def update_note(
    note_id: int,
    data: AdminNoteUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return note_service.update_note(db, note_id, data)


@router.delete("/{note_id}", response_model=SuccessOut)
def delete_note(
    note_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    note_service.delete_note(db, note_id)
    return {"success": True}
