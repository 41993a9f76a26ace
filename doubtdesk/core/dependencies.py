"""Dependency injection providers for FastAPI routes."""
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from doubtdesk.core.security import get_current_identity
from doubtdesk.db.sessions import get_db
from doubtdesk.domain.identity import Identity
from doubtdesk.repositories.doubt_repository import DoubtRepository
from doubtdesk.services.doubt_service import DoubtService
from doubtdesk.services.suggestion_service import SuggestionService


def get_doubt_repository(db: Session = Depends(get_db)) -> DoubtRepository:
    return DoubtRepository(db)


def get_doubt_service(repository: DoubtRepository = Depends(get_doubt_repository)) -> DoubtService:
    """DoubtService bound to the request-scoped session, configured from settings."""
    return DoubtService(repository)


def get_suggestion_service() -> SuggestionService:
    return SuggestionService()


# Type aliases for dependency injection
IdentityDep = Annotated[Identity, Depends(get_current_identity)]
DoubtRepositoryDep = Annotated[DoubtRepository, Depends(get_doubt_repository)]
DoubtServiceDep = Annotated[DoubtService, Depends(get_doubt_service)]
SuggestionServiceDep = Annotated[SuggestionService, Depends(get_suggestion_service)]
