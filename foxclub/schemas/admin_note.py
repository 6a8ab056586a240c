"""관리자 메모 API 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from foxclub.schemas.common import CamelModel


class AdminNoteCreate(CamelModel):
    user_id: int
    content: str = Field(min_length=1, max_length=5000)
    pinned: bool = False


class AdminNoteUpdate(CamelModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    pinned: Optional[bool] = None


class AdminNoteOut(CamelModel):
    note_id: int
    user_id: int
    admin_id: Optional[int] = None
    content: str
    pinned: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminNoteListOut(CamelModel):
    data: List[AdminNoteOut] = Field(default_factory=list)
