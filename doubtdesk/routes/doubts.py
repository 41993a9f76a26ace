"""Doubt and answer routes."""
import uuid
from typing import List, Optional, Union
from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from doubtdesk.core.dependencies import DoubtServiceDep, IdentityDep
from doubtdesk.domain.identity import Identity
from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.domain.policy import is_owner_or_instructor
from doubtdesk.domain.search import StatusFilter
from doubtdesk.models.doubt import Answer, Doubt


router = APIRouter(prefix="/doubts", tags=["Doubts"])


# Request/Response schemas
class DoubtRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class AnswerRequest(BaseModel):
    content: Optional[str] = None


class AuthorName(BaseModel):
    name: str


class DoubtAuthor(BaseModel):
    name: str
    email: str


class AnswerResponse(BaseModel):
    id: str
    content: str
    doubt_id: str
    author_id: str
    author: AuthorName
    created_at: str


class DoubtResponse(BaseModel):
    id: str
    title: str
    content: str
    status: DoubtStatus
    author_id: str
    author: Union[DoubtAuthor, AuthorName]
    created_at: str
    updated_at: Optional[str]
    answers: List[AnswerResponse]


class MessageResponse(BaseModel):
    message: str


def _answer_response(answer: Answer) -> AnswerResponse:
    # Answer authors are exposed by name only
    return AnswerResponse(
        id=str(answer.id),
        content=answer.content,
        doubt_id=str(answer.doubt_id),
        author_id=str(answer.author_id),
        author=AuthorName(name=answer.author.name),
        created_at=answer.created_at.isoformat(),
    )


def _doubt_response(doubt: Doubt, identity: Identity) -> DoubtResponse:
    # Emails are shown to instructors and to the author only
    if is_owner_or_instructor(identity, doubt):
        author = DoubtAuthor(name=doubt.author.name, email=doubt.author.email)
    else:
        author = AuthorName(name=doubt.author.name)
    return DoubtResponse(
        id=str(doubt.id),
        title=doubt.title,
        content=doubt.content,
        status=doubt.status,
        author_id=str(doubt.author_id),
        author=author,
        created_at=doubt.created_at.isoformat(),
        updated_at=doubt.updated_at.isoformat() if doubt.updated_at else None,
        answers=[_answer_response(a) for a in doubt.answers],
    )


@router.get("", response_model=List[DoubtResponse])
def list_doubts(identity: IdentityDep, service: DoubtServiceDep):
    """
    List every doubt visible to the caller, newest first.

    Instructors see all doubts; students see their own plus every resolved doubt.
    """
    return [_doubt_response(d, identity) for d in service.list_doubts(identity)]


@router.post("", response_model=DoubtResponse, status_code=status.HTTP_201_CREATED)
def create_doubt(request: DoubtRequest, identity: IdentityDep, service: DoubtServiceDep):
    """Post a new doubt. Students only."""
    doubt = service.create_doubt(identity, request.title, request.content)
    return _doubt_response(doubt, identity)


@router.get("/search", response_model=List[DoubtResponse])
def search_doubts(
    identity: IdentityDep,
    service: DoubtServiceDep,
    q: str = Query(default=""),
    status_filter: StatusFilter = Query(default=StatusFilter.ALL, alias="status"),
):
    """
    Search visible doubts by title or content.

    Args:
        q: Case-insensitive text to look for; empty matches everything
        status_filter: ALL, OPEN or RESOLVED

    Returns:
        At most SEARCH_RESULT_LIMIT doubts, newest first
    """
    return [_doubt_response(d, identity) for d in service.search_doubts(identity, q, status_filter)]


@router.get("/{doubt_id}", response_model=DoubtResponse)
def get_doubt(doubt_id: uuid.UUID, identity: IdentityDep, service: DoubtServiceDep):
    return _doubt_response(service.get_doubt(identity, doubt_id), identity)


@router.patch("/{doubt_id}", response_model=DoubtResponse)
def update_doubt(
    doubt_id: uuid.UUID,
    request: DoubtRequest,
    identity: IdentityDep,
    service: DoubtServiceDep,
):
    """
    Edit a doubt's title and content.

    Allowed for the author or any instructor while the doubt is still open.
    """
    doubt = service.update_doubt(identity, doubt_id, request.title, request.content)
    return _doubt_response(doubt, identity)


@router.delete("/{doubt_id}", response_model=MessageResponse)
def delete_doubt(doubt_id: uuid.UUID, identity: IdentityDep, service: DoubtServiceDep):
    """Delete a doubt and its answers. Author or instructor only."""
    service.delete_doubt(identity, doubt_id)
    return MessageResponse(message="Doubt deleted successfully.")


@router.patch("/{doubt_id}/resolve", response_model=DoubtResponse)
def resolve_doubt(doubt_id: uuid.UUID, identity: IdentityDep, service: DoubtServiceDep):
    """Mark a doubt as resolved. This cannot be undone."""
    return _doubt_response(service.resolve_doubt(identity, doubt_id), identity)


@router.post("/{doubt_id}/answers", response_model=AnswerResponse, status_code=status.HTTP_201_CREATED)
def create_answer(
    doubt_id: uuid.UUID,
    request: AnswerRequest,
    identity: IdentityDep,
    service: DoubtServiceDep,
):
    """Answer a doubt. Instructors only; the doubt stays open."""
    answer = service.create_answer(identity, doubt_id, request.content)
    return _answer_response(answer)
