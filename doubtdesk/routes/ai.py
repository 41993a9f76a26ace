"""AI answer suggestion routes."""
from fastapi import APIRouter
from pydantic import BaseModel

from doubtdesk.core.dependencies import IdentityDep, SuggestionServiceDep
from doubtdesk.core.exceptions import ValidationFailed
from doubtdesk.domain.policy import can_request_suggestion


router = APIRouter(prefix="/ai", tags=["AI"])


class SuggestRequest(BaseModel):
    title: str = ""
    content: str = ""


class SuggestResponse(BaseModel):
    suggestion: str


@router.post("/suggest-answer", response_model=SuggestResponse)
def suggest_answer(request: SuggestRequest, identity: IdentityDep, service: SuggestionServiceDep):
    """
    Draft an answer for a doubt with the configured LLM.

    Instructors only. Nothing is saved; the instructor reviews the text and
    posts it through the answers endpoint.

    Raises:
        403: Caller is not an instructor
        400: Title or content missing
        503: AI service unconfigured or failing
    """
    can_request_suggestion(identity)

    if not request.title.strip() or not request.content.strip():
        raise ValidationFailed(
            "title" if not request.title.strip() else "content",
            "required",
            "Title and content are required.",
        )

    return SuggestResponse(suggestion=service.suggest(request.title.strip(), request.content.strip()))
