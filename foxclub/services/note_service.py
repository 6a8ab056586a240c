"""관리자 메모 서비스 레이어입니다."""

import logging

from sqlalchemy.orm import Session

from foxclub.errors import NotFoundError
from foxclub.models.admin_note import AdminNote
from foxclub.models.user import User
from foxclub.schemas.admin_note import AdminNoteCreate, AdminNoteUpdate
from foxclub.services.user_service import get_user

logger = logging.getLogger(__name__)


def get_note(db: Session, note_id: int) -> AdminNote:
    note = db.query(AdminNote).filter(AdminNote.note_id == int(note_id)).first()
    if not note:
        raise NotFoundError("Note not found")
    return note


def list_notes(db: Session, user_id: int) -> list[AdminNote]:
    # 고정 메모 먼저, 같은 그룹 안에서는 최신순
    return (
        db.query(AdminNote)
        .filter(AdminNote.user_id == int(user_id))
        .order_by(AdminNote.pinned.desc(), AdminNote.created_at.desc(), AdminNote.note_id.desc())
        .all()
    )


def create_note(db: Session, data: AdminNoteCreate, author: User) -> AdminNote:
    subject = get_user(db, data.user_id)
    note = AdminNote(
        user_id=subject.user_id,
        admin_id=author.user_id,
        content=data.content,
        pinned=data.pinned,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    logger.info("[admin] user %s added note %s on user %s", author.user_id, note.note_id, subject.user_id)
    return note


def update_note(db: Session, note_id: int, data: AdminNoteUpdate) -> AdminNote:
    note = get_note(db, note_id)
    for key, value in data.model_dump(exclude_none=True).items():
        setattr(note, key, value)
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, note_id: int):
    note = get_note(db, note_id)
    db.delete(note)
    db.commit()
    logger.info("[admin] deleted note %s", note_id)
