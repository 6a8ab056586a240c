"""질문 카탈로그 API 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from foxclub.models.question import QuestionType
from foxclub.schemas.common import CamelModel, PaginationOut


class QuestionFamilyCreate(CamelModel):
    label: str = Field(min_length=1, max_length=100)
    type: QuestionType
    order: Optional[int] = Field(default=None, ge=0)


class QuestionFamilyUpdate(CamelModel):
    label: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[QuestionType] = None
    order: Optional[int] = Field(default=None, ge=0)


class QuestionFamilySummary(CamelModel):
    family_id: int
    label: str
    type: QuestionType


class QuestionFamilyOut(QuestionFamilySummary):
    order: int
    question_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuestionCreate(CamelModel):
    question_family_id: int
    text: str = Field(min_length=1, max_length=1000)
    order: Optional[int] = Field(default=None, ge=0)


class QuestionUpdate(CamelModel):
    text: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    order: Optional[int] = Field(default=None, ge=0)
    question_family_id: Optional[int] = None


class QuestionOut(CamelModel):
    question_id: int
    question_family_id: int
    text: str
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuestionDetailOut(QuestionOut):
    question_family: QuestionFamilySummary
    answer_count: int = 0


class QuestionFamilyDetailOut(QuestionFamilyOut):
    questions: List[QuestionOut] = Field(default_factory=list)


class QuestionFamilyListOut(CamelModel):
    data: List[QuestionFamilyOut] = Field(default_factory=list)
    pagination: PaginationOut


class QuestionListOut(CamelModel):
    data: List[QuestionDetailOut] = Field(default_factory=list)
    pagination: PaginationOut
