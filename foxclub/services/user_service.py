"""관리자용 사용자 관리 서비스 레이어입니다. 승인/역할/프로필 변경, 일괄 처리, 비밀번호 재설정을 담당합니다."""

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from foxclub.errors import NotFoundError, ValidationError
from foxclub.models.admin_note import AdminNote
from foxclub.models.form import FormAnswer, UserForm
from foxclub.models.question import Question
from foxclub.models.user import User, UserRole, UserType
from foxclub.schemas.admin_note import AdminNoteOut
from foxclub.schemas.form import FormAnswerDetailOut, UserFormDetailOut
from foxclub.schemas.user import (
    AdminResetPasswordRequest,
    AdminUserDetailOut,
    BulkUserActionRequest,
    UserCreate,
    UserOut,
    UserUpdate,
)
from foxclub.services import auth_service
from foxclub.utils.helpers import contains_pattern, paginate
from foxclub.utils.permissions import ADMINISTRATOR_ROLES

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == int(user_id)).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _attach_list_fields(db: Session, user: User) -> User:
    count = db.query(AdminNote).filter(AdminNote.user_id == user.user_id).count()
    setattr(user, "note_count", count)
    return user


def _ensure_not_last_admin_change(db: Session, user: User, next_role):
    if user.role not in ADMINISTRATOR_ROLES or next_role in ADMINISTRATOR_ROLES:
        return
    admin_count = db.query(User).filter(User.role.in_(ADMINISTRATOR_ROLES)).count()
    if admin_count <= 1:
        raise ValidationError("Cannot remove the last administrator")


def list_users(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    approved: bool | None = None,
    role: UserRole | None = None,
    user_type: UserType | None = None,
    search: str | None = None,
) -> dict:
    query = db.query(User).options(joinedload(User.user_form))
    if approved is not None:
        query = query.filter(User.approved == approved)
    if role is not None:
        query = query.filter(User.role == role)
    if user_type is not None:
        # types_json은 '["ETUDIANT", "SOUMIS"]' 형태로 저장된다.
        query = query.filter(User.types_json.like(f'%"{UserType(user_type).value}"%'))
    if search and search.strip():
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                func.lower(User.pseudo).like(pattern, escape="\\"),
                func.lower(User.email).like(pattern, escape="\\"),
                func.lower(User.first_name).like(pattern, escape="\\"),
                func.lower(User.last_name).like(pattern, escape="\\"),
            )
        )
    query = query.order_by(User.created_at.desc(), User.user_id.desc())
    rows, pagination = paginate(query, page, limit)
    return {
        "data": [_attach_list_fields(db, row) for row in rows],
        "pagination": pagination,
    }


def _sorted_answers(form: UserForm) -> list[FormAnswer]:
    return sorted(
        form.answers,
        key=lambda row: (
            row.question.question_family.order,
            row.question.question_family_id,
            row.question.order,
            row.question_id,
        ),
    )


def get_user_detail(db: Session, user_id: int) -> AdminUserDetailOut:
    user = get_user(db, user_id)
    form = (
        db.query(UserForm)
        .options(
            joinedload(UserForm.answers)
            .joinedload(FormAnswer.question)
            .joinedload(Question.question_family)
        )
        .filter(UserForm.user_id == user.user_id)
        .first()
    )
    form_out = None
    if form:
        form_out = UserFormDetailOut.model_validate(form).model_copy(
            update={"answers": [FormAnswerDetailOut.model_validate(row) for row in _sorted_answers(form)]}
        )
    return AdminUserDetailOut(
        **UserOut.model_validate(user).model_dump(),
        user_form=form_out,
        admin_notes=[AdminNoteOut.model_validate(note) for note in user.admin_notes],
    )


def create_user(db: Session, data: UserCreate) -> User:
    auth_service.ensure_unique_identity(db, data.pseudo, data.email)
    user = User(
        pseudo=data.pseudo.strip(),
        email=data.email.strip().lower() if data.email else None,
        first_name=data.first_name,
        last_name=data.last_name,
        password_hash=auth_service.hash_password(data.password),
        role=data.role,
        approved=data.approved,
        must_change_password=False,
    )
    user.types = data.types
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("[admin] created user %s (role=%s)", user.user_id, user.role.value)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    payload = data.model_dump(exclude_unset=True)
    # 필수 컬럼은 null로 덮어쓰지 않는다. email/이름은 null로 비울 수 있다.
    for key in ("pseudo", "role", "approved", "types"):
        if key in payload and payload[key] is None:
            payload.pop(key)

    auth_service.ensure_unique_identity(
        db,
        payload.get("pseudo"),
        payload.get("email"),
        exclude_user_id=user.user_id,
    )
    if "role" in payload:
        _ensure_not_last_admin_change(db, user, payload["role"])
    if "pseudo" in payload:
        payload["pseudo"] = payload["pseudo"].strip()
    if payload.get("email"):
        payload["email"] = payload["email"].strip().lower()

    for key, value in payload.items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    logger.info("[admin] updated user %s fields=%s", user.user_id, sorted(payload))
    return user


def delete_user(db: Session, user_id: int, current_user: User):
    user = get_user(db, user_id)
    if user.user_id == current_user.user_id:
        raise ValidationError("You cannot delete your own account")
    db.delete(user)
    db.commit()
    logger.info("[admin] user %s deleted user %s", current_user.user_id, user_id)


def bulk_action(db: Session, data: BulkUserActionRequest, current_user: User) -> dict:
    user_ids = sorted(set(int(user_id) for user_id in data.user_ids))
    query = db.query(User).filter(User.user_id.in_(user_ids))
    if data.action == "delete":
        query = query.filter(User.user_id != current_user.user_id)
        users = query.all()
        for user in users:
            db.delete(user)
        count = len(users)
    else:
        count = query.update({"approved": data.action == "approve"}, synchronize_session=False)
    db.commit()
    logger.info("[admin] user %s bulk %s on %s users", current_user.user_id, data.action, count)
    return {"success": True, "count": count}


def reset_password(db: Session, user_id: int, data: AdminResetPasswordRequest) -> dict:
    user = get_user(db, user_id)
    plain_password = data.password or auth_service.generate_password()
    user.password_hash = auth_service.hash_password(plain_password)
    user.must_change_password = data.must_change_password
    db.commit()
    logger.info("[admin] password reset for user %s", user.user_id)
    return {
        "password": plain_password,
        "must_change_password": data.must_change_password,
    }


def get_profile(db: Session, user_id: int) -> User:
    return get_user(db, user_id)
