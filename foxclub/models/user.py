"""User 도메인의 SQLAlchemy 모델 정의입니다."""

import enum
import json

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from foxclub.database import Base


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"


class UserType(str, enum.Enum):
    ETUDIANT = "ETUDIANT"
    SOUMIS = "SOUMIS"


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    pseudo = Column(String(50), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    password_hash = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False, default=UserRole.USER)
    approved = Column(Boolean, nullable=False, default=False)
    must_change_password = Column(Boolean, nullable=False, default=False)
    types_json = Column(Text, nullable=False, default="[]")
    oauth_provider = Column(String(20), nullable=True)
    oauth_subject = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # Relationships
    user_form = relationship(
        "UserForm",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    admin_notes = relationship(
        "AdminNote",
        foreign_keys="AdminNote.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AdminNote.pinned.desc(), AdminNote.created_at.desc(), AdminNote.note_id.desc()",
    )

    __table_args__ = (
        UniqueConstraint("oauth_provider", "oauth_subject", name="uq_users_oauth_identity"),
    )

    @property
    def types(self) -> list[str]:
        try:
            parsed = json.loads(self.types_json or "[]")
        except json.JSONDecodeError:
            return []
        if not isinstance(parsed, list):
            return []
        return [str(v) for v in parsed]

    @types.setter
    def types(self, values):
        normalized = []
        for raw in values or []:
            value = raw.value if isinstance(raw, UserType) else str(raw)
            if value not in normalized:
                normalized.append(value)
        self.types_json = json.dumps(normalized)

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.pseudo
