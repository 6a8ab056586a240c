"""설문 폼 조회/저장 API 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from foxclub.schemas.common import CamelModel
from foxclub.schemas.question import QuestionFamilySummary, QuestionOut


class AnswerBase(CamelModel):
    score: int = Field(ge=1, le=4, strict=True)
    notes: Optional[str] = Field(default=None, max_length=2000)


class FormAnswerInput(AnswerBase):
    """Answer payload as sent by the form page; both shapes share it."""

    top: Optional[bool] = None
    bot: Optional[bool] = None
    talk: Optional[bool] = None
    include: Optional[bool] = None


class Type1Answer(AnswerBase):
    model_config = ConfigDict(extra="forbid")

    top: bool = False
    bot: bool = False
    talk: bool = False


class Type2Answer(AnswerBase):
    model_config = ConfigDict(extra="forbid")

    talk: bool = False
    include: bool = False


class FormAnswerItem(CamelModel):
    question_id: int
    answer: FormAnswerInput


class SubmitFormRequest(CamelModel):
    answers: List[FormAnswerItem] = Field(min_length=1)
    submitted: bool = False


class FormAnswerOut(CamelModel):
    answer_id: int
    form_id: int
    question_id: int
    score: int
    top: bool = False
    bot: bool = False
    talk: bool = False
    include: bool = False
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnswerQuestionOut(CamelModel):
    question_id: int
    text: str
    order: int
    question_family: QuestionFamilySummary


class FormAnswerDetailOut(FormAnswerOut):
    question: Optional[AnswerQuestionOut] = None


class UserFormOut(CamelModel):
    form_id: int
    user_id: int
    submitted: bool
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    answers: List[FormAnswerOut] = Field(default_factory=list)


class UserFormDetailOut(UserFormOut):
    answers: List[FormAnswerDetailOut] = Field(default_factory=list)


class FormSummaryOut(CamelModel):
    form_id: int
    submitted: bool
    updated_at: Optional[datetime] = None


class CatalogFamilyOut(QuestionFamilySummary):
    order: int
    questions: List[QuestionOut] = Field(default_factory=list)


class FormPageOut(CamelModel):
    form: UserFormOut
    question_families: List[CatalogFamilyOut] = Field(default_factory=list)
