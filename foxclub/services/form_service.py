"""설문 폼 워크플로 서비스 레이어입니다.

폼 상태는 Absent(행 없음) -> Draft(submitted=false) -> Submitted(submitted=true)로만 이동하며,
Submitted 이후에는 어떤 응답도 생성/수정되지 않습니다.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from foxclub.errors import ConflictError, Forbidden, NotFoundError, ValidationError
from foxclub.models.form import FormAnswer, UserForm
from foxclub.models.question import Question, QuestionType
from foxclub.models.user import User
from foxclub.schemas.form import FormAnswerInput, SubmitFormRequest, Type1Answer, Type2Answer
from foxclub.services import pdf_service, question_service
from foxclub.utils.permissions import can_access_form

logger = logging.getLogger(__name__)

NOT_APPROVED_MESSAGE = "You must be approved by an admin to access the form"
ALREADY_SUBMITTED_MESSAGE = "Form has already been submitted"

ANSWER_SCHEMAS = {
    QuestionType.TYPE_1: Type1Answer,
    QuestionType.TYPE_2: Type2Answer,
}


def _ensure_approved(user: User):
    if not can_access_form(user):
        raise Forbidden(NOT_APPROVED_MESSAGE)


def find_form(db: Session, user_id: int) -> UserForm | None:
    return db.query(UserForm).filter(UserForm.user_id == int(user_id)).first()


def get_or_create_form(db: Session, user: User) -> UserForm:
    form = find_form(db, user.user_id)
    if form:
        return form
    form = UserForm(user_id=user.user_id, submitted=False)
    db.add(form)
    try:
        db.commit()
    except IntegrityError:
        # 동시 요청이 먼저 생성한 경우 unique(user_id)에 막히므로 기존 행을 다시 읽는다.
        db.rollback()
        form = find_form(db, user.user_id)
        if form is None:
            raise
        return form
    db.refresh(form)
    logger.info("[form] created draft form %s for user %s", form.form_id, user.user_id)
    return form


def get_form(db: Session, user: User) -> dict:
    _ensure_approved(user)
    form = get_or_create_form(db, user)
    return {
        "form": form,
        "question_families": question_service.load_catalog(db),
    }


def _validate_answer_shape(answer: FormAnswerInput, question_type: QuestionType, index: int) -> dict:
    payload = {
        key: value
        for key, value in answer.model_dump(exclude_unset=True).items()
        if value is not None or key == "notes"
    }
    schema = ANSWER_SCHEMAS[QuestionType(question_type)]
    try:
        validated = schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(
            exc,
            prefix=f"answers.{index}.answer",
            message=f"Answer does not match question type {QuestionType(question_type).value}",
        ) from exc
    return {key: getattr(validated, key) for key in payload}


def _prepare_answers(db: Session, data: SubmitFormRequest) -> list[tuple[int, dict]]:
    seen = set()
    for index, item in enumerate(data.answers):
        if item.question_id in seen:
            raise ValidationError(
                "Duplicate answer for question",
                details=[{"field": f"answers.{index}.questionId", "message": "Question answered twice"}],
            )
        seen.add(item.question_id)

    questions = {
        row.question_id: row
        for row in db.query(Question)
        .options(joinedload(Question.question_family))
        .filter(Question.question_id.in_(seen))
        .all()
    }
    prepared = []
    for index, item in enumerate(data.answers):
        question = questions.get(item.question_id)
        if question is None:
            raise ValidationError(
                "Unknown question",
                details=[{"field": f"answers.{index}.questionId", "message": "Question does not exist"}],
            )
        fields = _validate_answer_shape(item.answer, question.question_family.type, index)
        prepared.append((question.question_id, fields))
    return prepared


def _upsert_answer(db: Session, form: UserForm, question_id: int, fields: dict) -> FormAnswer:
    # 조회 후 삽입이므로 동시 첫 저장은 (form_id, question_id) 유니크 제약에서 걸린다.
    existing = (
        db.query(FormAnswer)
        .filter(
            FormAnswer.form_id == form.form_id,
            FormAnswer.question_id == int(question_id),
        )
        .first()
    )
    if existing:
        for key, value in fields.items():
            setattr(existing, key, value)
        return existing
    row = FormAnswer(form_id=form.form_id, question_id=int(question_id), **fields)
    db.add(row)
    return row


def _mark_submitted(db: Session, form: UserForm):
    db.flush()
    updated = (
        db.query(UserForm)
        .filter(UserForm.form_id == form.form_id, UserForm.submitted == False)  # noqa: E712
        .update({"submitted": True, "submitted_at": func.now()}, synchronize_session=False)
    )
    if updated == 0:
        raise Forbidden(ALREADY_SUBMITTED_MESSAGE)


def save_answers(db: Session, user: User, data: SubmitFormRequest) -> UserForm:
    _ensure_approved(user)
    form = get_or_create_form(db, user)
    if form.submitted:
        raise Forbidden(ALREADY_SUBMITTED_MESSAGE)

    prepared = _prepare_answers(db, data)
    try:
        for question_id, fields in prepared:
            _upsert_answer(db, form, question_id, fields)
        if data.submitted:
            _mark_submitted(db, form)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("[form] concurrent answer insert on form %s: %s", form.form_id, exc.orig)
        raise ConflictError("Answers were saved concurrently, please retry") from exc
    except Exception:
        db.rollback()
        raise

    db.refresh(form)
    if data.submitted:
        logger.info("[form] user %s submitted form %s (%s answers)", user.user_id, form.form_id, len(prepared))
    else:
        logger.info("[form] user %s saved %s answers on form %s", user.user_id, len(prepared), form.form_id)
    return load_form_detail(db, form.form_id)


def load_form_detail(db: Session, form_id: int) -> UserForm:
    form = (
        db.query(UserForm)
        .options(
            joinedload(UserForm.answers)
            .joinedload(FormAnswer.question)
            .joinedload(Question.question_family)
        )
        .filter(UserForm.form_id == int(form_id))
        .first()
    )
    if not form:
        raise NotFoundError("Form not found")
    return form


def _answers_by_question(form: UserForm | None) -> dict[int, FormAnswer]:
    if form is None:
        return {}
    return {int(row.question_id): row for row in form.answers}


def export_pdf(db: Session, owner: User) -> bytes:
    form = find_form(db, owner.user_id)
    return pdf_service.render_form_pdf(
        question_service.load_catalog(db),
        _answers_by_question(form),
        user_name=owner.display_name,
    )


def export_own_pdf(db: Session, user: User) -> bytes:
    _ensure_approved(user)
    return export_pdf(db, user)
