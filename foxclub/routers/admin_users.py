"""관리자용 사용자 관리 API 라우터입니다."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_administrator
from foxclub.models.user import User, UserRole, UserType
from foxclub.schemas.common import SuccessOut
from foxclub.schemas.user import (
    AdminResetPasswordRequest,
    AdminResetPasswordResult,
    AdminUserDetailOut,
    BulkUserActionRequest,
    BulkUserActionResult,
    UserCreate,
    UserListOut,
    UserOut,
    UserUpdate,
)
from foxclub.services import form_service, user_service

router = APIRouter(prefix="/api/admin/users", tags=["admin-users"])


@router.get("", response_model=UserListOut)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    approved: Optional[bool] = None,
    role: Optional[UserRole] = None,
    type: Optional[UserType] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return user_service.list_users(
        db,
        page=page,
        limit=limit,
        approved=approved,
        role=role,
        user_type=type,
        search=search,
    )


@router.post("", response_model=BulkUserActionResult)
def bulk_action(
    data: BulkUserActionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_administrator),
):
    return user_service.bulk_action(db, data, current_user)


@router.post("/create", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return user_service.create_user(db, data)


@router.get("/{user_id}", response_model=AdminUserDetailOut)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return user_service.get_user_detail(db, user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return user_service.update_user(db, user_id, data)


@router.delete("/{user_id}", response_model=SuccessOut)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_administrator),
):
    user_service.delete_user(db, user_id, current_user)
    return {"success": True}


@router.post("/{user_id}/password", response_model=AdminResetPasswordResult)
def reset_password(
    user_id: int,
    data: AdminResetPasswordRequest,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    return user_service.reset_password(db, user_id, data)


@router.get("/{user_id}/form.pdf")
def export_user_form_pdf(
    user_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_administrator),
):
    owner = user_service.get_user(db, user_id)
    content = form_service.export_pdf(db, owner)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="fox-club-form-{owner.user_id}.pdf"'},
    )
