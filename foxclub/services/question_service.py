"""질문 카탈로그 서비스 레이어입니다. 질문 패밀리/질문 CRUD와 표시 순서 규칙을 캡슐화합니다."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from foxclub.errors import NotFoundError, ValidationError
from foxclub.models.form import FormAnswer
from foxclub.models.question import Question, QuestionFamily, QuestionType
from foxclub.schemas.question import (
    QuestionCreate,
    QuestionFamilyCreate,
    QuestionFamilyUpdate,
    QuestionUpdate,
)
from foxclub.utils.helpers import contains_pattern, paginate

logger = logging.getLogger(__name__)


def _next_family_order(db: Session) -> int:
    max_order = db.query(func.max(QuestionFamily.order)).scalar()
    return int(max_order or 0) + 1


def _next_question_order(db: Session, family_id: int) -> int:
    max_order = (
        db.query(func.max(Question.order))
        .filter(Question.question_family_id == int(family_id))
        .scalar()
    )
    return int(max_order or 0) + 1


def _attach_question_count(db: Session, family: QuestionFamily) -> QuestionFamily:
    count = db.query(Question).filter(Question.question_family_id == family.family_id).count()
    setattr(family, "question_count", count)
    return family


def _attach_answer_count(db: Session, question: Question) -> Question:
    count = db.query(FormAnswer).filter(FormAnswer.question_id == question.question_id).count()
    setattr(question, "answer_count", count)
    return question


def get_family(db: Session, family_id: int) -> QuestionFamily:
    row = db.query(QuestionFamily).filter(QuestionFamily.family_id == int(family_id)).first()
    if not row:
        raise NotFoundError("Question family not found")
    return row


def get_question(db: Session, question_id: int) -> Question:
    row = db.query(Question).filter(Question.question_id == int(question_id)).first()
    if not row:
        raise NotFoundError("Question not found")
    return row


def list_families(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    family_type: QuestionType | None = None,
    search: str | None = None,
) -> dict:
    query = db.query(QuestionFamily)
    if family_type is not None:
        query = query.filter(QuestionFamily.type == family_type)
    if search and search.strip():
        query = query.filter(func.lower(QuestionFamily.label).like(contains_pattern(search), escape="\\"))
    query = query.order_by(QuestionFamily.order.asc(), QuestionFamily.family_id.asc())
    rows, pagination = paginate(query, page, limit)
    return {
        "data": [_attach_question_count(db, row) for row in rows],
        "pagination": pagination,
    }


def get_family_detail(db: Session, family_id: int) -> QuestionFamily:
    return _attach_question_count(db, get_family(db, family_id))


def create_family(db: Session, data: QuestionFamilyCreate) -> QuestionFamily:
    order = data.order if data.order is not None else _next_family_order(db)
    row = QuestionFamily(label=data.label, type=data.type, order=order)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("[catalog] created family %s (%s, order=%s)", row.family_id, row.type.value, row.order)
    return _attach_question_count(db, row)


def update_family(db: Session, family_id: int, data: QuestionFamilyUpdate) -> QuestionFamily:
    row = get_family(db, family_id)
    payload = data.model_dump(exclude_none=True)
    # 타입은 생성 시점에 고정된다.
    if payload.pop("type", row.type) != row.type:
        raise ValidationError(
            "Question family type cannot be changed",
            details=[{"field": "type", "message": f"Family is {row.type.value}"}],
        )
    for key, value in payload.items():
        setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return _attach_question_count(db, row)


def delete_family(db: Session, family_id: int):
    row = get_family(db, family_id)
    db.delete(row)
    db.commit()
    logger.info("[catalog] deleted family %s", family_id)


def list_questions(
    db: Session,
    *,
    page: int = 1,
    limit: int = 50,
    family_id: int | None = None,
    search: str | None = None,
) -> dict:
    query = db.query(Question)
    if family_id is not None:
        query = query.filter(Question.question_family_id == int(family_id))
    if search and search.strip():
        query = query.filter(func.lower(Question.text).like(contains_pattern(search), escape="\\"))
    query = query.order_by(
        Question.question_family_id.asc(),
        Question.order.asc(),
        Question.question_id.asc(),
    )
    rows, pagination = paginate(query, page, limit)
    return {
        "data": [_attach_answer_count(db, row) for row in rows],
        "pagination": pagination,
    }


def get_question_detail(db: Session, question_id: int) -> Question:
    return _attach_answer_count(db, get_question(db, question_id))


def create_question(db: Session, data: QuestionCreate) -> Question:
    family = get_family(db, data.question_family_id)
    order = data.order if data.order is not None else _next_question_order(db, family.family_id)
    row = Question(question_family_id=family.family_id, text=data.text, order=order)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("[catalog] created question %s in family %s (order=%s)", row.question_id, family.family_id, order)
    return _attach_answer_count(db, row)


def update_question(db: Session, question_id: int, data: QuestionUpdate) -> Question:
    row = get_question(db, question_id)
    payload = data.model_dump(exclude_none=True)
    if "question_family_id" in payload:
        target = get_family(db, payload["question_family_id"])
        # 답변이 있는 질문은 다른 타입의 패밀리로 옮길 수 없다.
        if target.type != row.question_family.type:
            answered = db.query(FormAnswer.answer_id).filter(FormAnswer.question_id == row.question_id).first()
            if answered:
                raise ValidationError(
                    "Cannot move an answered question to a family of another type",
                    details=[{"field": "questionFamilyId", "message": f"Question answers are {row.question_family.type.value}"}],
                )
    for key, value in payload.items():
        setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return _attach_answer_count(db, row)


def delete_question(db: Session, question_id: int):
    row = get_question(db, question_id)
    db.delete(row)
    db.commit()
    logger.info("[catalog] deleted question %s", question_id)


def load_catalog(db: Session) -> list[QuestionFamily]:
    return (
        db.query(QuestionFamily)
        .order_by(QuestionFamily.order.asc(), QuestionFamily.family_id.asc())
        .all()
    )
