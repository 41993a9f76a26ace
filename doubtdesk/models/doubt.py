"""Doubt and answer models."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from doubtdesk.db.base import Base
from doubtdesk.domain.lifecycle import DoubtStatus, INITIAL_STATUS


class Doubt(Base):
    """A question posted by a student."""

    __tablename__ = "doubts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(
        Enum(DoubtStatus, name="doubt_status", native_enum=False),
        nullable=False,
        default=INITIAL_STATUS,
        index=True,
    )
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", back_populates="doubts")
    answers = relationship(
        "Answer",
        back_populates="doubt",
        cascade="all, delete-orphan",
        order_by="Answer.created_at",
    )


class Answer(Base):
    """An instructor's reply to a doubt. Never edited once written."""

    __tablename__ = "answers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)
    doubt_id = Column(UUID(as_uuid=True), ForeignKey("doubts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    doubt = relationship("Doubt", back_populates="answers")
    author = relationship("User", back_populates="answers")
