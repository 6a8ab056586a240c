"""Users 기능 API 라우터입니다. 프로필 조회는 관리자 또는 본인에게만 허용됩니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import ensure_can_view_profile, require_authenticated
from foxclub.models.user import User
from foxclub.schemas.user import ProfileOut
from foxclub.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}/profile", response_model=ProfileOut)
def get_profile(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated),
):
    ensure_can_view_profile(current_user, user_id)
    return user_service.get_profile(db, user_id)
