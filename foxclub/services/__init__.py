"""서비스 레이어 패키지 초기화 모듈입니다."""

from foxclub.services import (
    auth_service,
    pdf_service,
    question_service,
    form_service,
    user_service,
    note_service,
    oauth_service,
)
