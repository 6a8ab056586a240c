"""본인 계정 관리 API 라우터입니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_authenticated
from foxclub.models.user import User
from foxclub.schemas.common import SuccessOut
from foxclub.schemas.user import ChangePasswordRequest
from foxclub.services import auth_service

router = APIRouter(prefix="/api/account", tags=["account"])


@router.patch("/password", response_model=SuccessOut)
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated),
):
    auth_service.change_own_password(db, current_user, data)
    return {"success": True}
