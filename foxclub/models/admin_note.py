"""관리자 전용 사용자 메모 SQLAlchemy 모델입니다."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from foxclub.database import Base


class AdminNote(Base):
    __tablename__ = "admin_note"

    note_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    admin_id = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    content = Column(Text, nullable=False)
    pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    user = relationship("User", foreign_keys=[user_id], back_populates="admin_notes")
    admin = relationship("User", foreign_keys=[admin_id])

    __table_args__ = (
        Index("idx_admin_note_user_pinned", "user_id", "pinned", "created_at"),
    )
