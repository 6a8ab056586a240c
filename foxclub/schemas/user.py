"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from foxclub.models.user import UserRole, UserType
from foxclub.schemas.admin_note import AdminNoteOut
from foxclub.schemas.common import CamelModel, PaginationOut
from foxclub.schemas.form import FormSummaryOut, UserFormDetailOut

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UserOut(CamelModel):
    user_id: int
    pseudo: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    approved: bool
    must_change_password: bool = False
    types: List[UserType] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MeOut(UserOut):
    can_administer: bool = False


class LoginRequest(CamelModel):
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: MeOut


class RegisterRequest(CamelModel):
    pseudo: str = Field(min_length=3, max_length=50)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    password: str = Field(min_length=8)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return _blank_to_none(value)


class UserCreate(RegisterRequest):
    role: UserRole = UserRole.USER
    types: List[UserType] = Field(default_factory=list)
    approved: bool = True


class UserUpdate(CamelModel):
    pseudo: Optional[str] = Field(default=None, min_length=3, max_length=50)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    role: Optional[UserRole] = None
    types: Optional[List[UserType]] = None
    approved: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return _blank_to_none(value)


class BulkUserActionRequest(CamelModel):
    user_ids: List[int] = Field(min_length=1)
    action: Literal["approve", "reject", "delete"]


class BulkUserActionResult(CamelModel):
    success: bool = True
    count: int


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)


class AdminResetPasswordRequest(CamelModel):
    password: Optional[str] = Field(default=None, min_length=8)
    must_change_password: bool = True


class AdminResetPasswordResult(CamelModel):
    password: str
    must_change_password: bool


class UserListItemOut(UserOut):
    note_count: int = 0
    user_form: Optional[FormSummaryOut] = None


class UserListOut(CamelModel):
    data: List[UserListItemOut] = Field(default_factory=list)
    pagination: PaginationOut


class ProfileOut(UserOut):
    user_form: Optional[FormSummaryOut] = None


class AdminUserDetailOut(UserOut):
    user_form: Optional[UserFormDetailOut] = None
    admin_notes: List[AdminNoteOut] = Field(default_factory=list)


class OAuthAuthorizeOut(CamelModel):
    url: str


class OAuthCallbackRequest(CamelModel):
    code: str = Field(min_length=1)
