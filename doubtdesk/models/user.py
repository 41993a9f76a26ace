"""User model."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from doubtdesk.db.base import Base
from doubtdesk.domain.identity import Identity, Role


class User(Base):
    """Registered student or instructor. Role never changes after signup."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(Role, name="user_role", native_enum=False), nullable=False, default=Role.STUDENT)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    doubts = relationship("Doubt", back_populates="author")
    answers = relationship("Answer", back_populates="author")

    def identity(self) -> Identity:
        return Identity(id=self.id, role=Role(self.role))
