"""Persistence for users, doubts and answers."""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from doubtdesk.domain.identity import Identity, Role
from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.domain.search import DoubtQuery, build_statement
from doubtdesk.models.doubt import Answer, Doubt
from doubtdesk.models.user import User

logger = logging.getLogger(__name__)


class DoubtRepository:
    """Thin data-access layer over a request-scoped SQLAlchemy session.

    Each mutating method commits its own transaction and rolls back on error.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # Users

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, name: str, email: str, password_hash: str, role: Role) -> User:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    # Doubts

    def create_doubt(self, title: str, content: str, author_id: uuid.UUID) -> Doubt:
        doubt = Doubt(title=title, content=content, author_id=author_id, status=DoubtStatus.OPEN)
        self.db.add(doubt)
        self._commit()
        return self.get_doubt(doubt.id)

    def get_doubt(self, doubt_id: uuid.UUID) -> Optional[Doubt]:
        stmt = (
            select(Doubt)
            .where(Doubt.id == doubt_id)
            .options(
                joinedload(Doubt.author),
                selectinload(Doubt.answers).joinedload(Answer.author),
            )
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalars().first()

    def update_doubt(self, doubt_id: uuid.UUID, **fields) -> Doubt:
        doubt = self.db.get(Doubt, doubt_id)
        for name, value in fields.items():
            setattr(doubt, name, value)
        self._commit()
        return self.get_doubt(doubt_id)

    def delete_doubt(self, doubt_id: uuid.UUID) -> None:
        doubt = self.db.get(Doubt, doubt_id)
        if doubt is None:
            return
        # Answers go with the doubt via the delete-orphan cascade
        self.db.delete(doubt)
        self._commit()

    def list_doubts(self, identity: Identity, query: DoubtQuery) -> List[Doubt]:
        return list(self.db.execute(build_statement(identity, query)).scalars().all())

    # Answers

    def create_answer(self, doubt_id: uuid.UUID, content: str, author_id: uuid.UUID) -> Answer:
        answer = Answer(doubt_id=doubt_id, content=content, author_id=author_id)
        self.db.add(answer)
        self._commit()
        self.db.refresh(answer)
        return answer
