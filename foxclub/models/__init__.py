"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from foxclub.models.user import User, UserRole, UserType
from foxclub.models.question import QuestionFamily, Question, QuestionType
from foxclub.models.form import UserForm, FormAnswer
from foxclub.models.admin_note import AdminNote

__all__ = [
    "User", "UserRole", "UserType",
    "QuestionFamily", "Question", "QuestionType",
    "UserForm", "FormAnswer",
    "AdminNote",
]
