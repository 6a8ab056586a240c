"""사용자 설문 폼(UserForm)과 문항별 응답(FormAnswer) SQLAlchemy 모델입니다."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from foxclub.database import Base


class UserForm(Base):
    __tablename__ = "user_form"

    form_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    submitted = Column(Boolean, nullable=False, default=False)
    submitted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    user = relationship("User", back_populates="user_form")
    answers = relationship(
        "FormAnswer",
        back_populates="form",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FormAnswer.answer_id.asc()",
    )

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_user_form_user"),
    )


class FormAnswer(Base):
    __tablename__ = "form_answer"

    answer_id = Column(Integer, primary_key=True, autoincrement=True)
    form_id = Column(Integer, ForeignKey("user_form.form_id", ondelete="CASCADE"), nullable=False)
    question_id = Column(Integer, ForeignKey("question.question_id", ondelete="CASCADE"), nullable=False)
    score = Column(Integer, nullable=False)
    top = Column(Boolean, nullable=False, default=False)
    bot = Column(Boolean, nullable=False, default=False)
    talk = Column(Boolean, nullable=False, default=False)
    include = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    form = relationship("UserForm", back_populates="answers")
    question = relationship("Question", back_populates="answers")

    __table_args__ = (
        UniqueConstraint("form_id", "question_id", name="uq_form_answer_form_question"),
        Index("idx_form_answer_question", "question_id"),
    )
