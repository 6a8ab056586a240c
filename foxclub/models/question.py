"""질문 카탈로그(QuestionFamily, Question) SQLAlchemy 모델입니다."""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from foxclub.database import Base


class QuestionType(str, enum.Enum):
    TYPE_1 = "TYPE_1"  # score, top, bot, talk, notes
    TYPE_2 = "TYPE_2"  # score, talk, include, notes


class QuestionFamily(Base):
    __tablename__ = "question_family"

    family_id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(100), nullable=False)
    type = Column(Enum(QuestionType, native_enum=False, length=20), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    questions = relationship(
        "Question",
        back_populates="question_family",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Question.order.asc(), Question.question_id.asc()",
    )

    __table_args__ = (
        Index("idx_question_family_order", "order"),
    )


class Question(Base):
    __tablename__ = "question"

    question_id = Column(Integer, primary_key=True, autoincrement=True)
    question_family_id = Column(
        Integer,
        ForeignKey("question_family.family_id", ondelete="CASCADE"),
        nullable=False,
    )
    text = Column(Text, nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    question_family = relationship("QuestionFamily", back_populates="questions")
    answers = relationship(
        "FormAnswer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_question_family_order_pair", "question_family_id", "order"),
    )
