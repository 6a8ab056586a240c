"""설문 폼 API 라우터입니다. 승인된 사용자만 자신의 폼을 조회/저장/제출할 수 있습니다."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from foxclub.database import get_db
from foxclub.middleware.auth_middleware import require_authenticated
from foxclub.models.user import User
from foxclub.schemas.form import FormPageOut, SubmitFormRequest, UserFormDetailOut
from foxclub.services import form_service

router = APIRouter(prefix="/api/form", tags=["form"])

PDF_MEDIA_TYPE = "application/pdf"


@router.get("", response_model=FormPageOut)
def get_form(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated),
):
    return form_service.get_form(db, current_user)


@router.post("", response_model=UserFormDetailOut)
def save_form(
    data: SubmitFormRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated),
):
    return form_service.save_answers(db, current_user, data)


@router.get("/export.pdf")
def export_form_pdf(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated),
):
    content = form_service.export_own_pdf(db, current_user)
    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="fox-club-form.pdf"'},
    )
