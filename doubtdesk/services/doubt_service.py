"""Doubt lifecycle and access-control service.

Ties together the pure policy, lifecycle, validation and search rules with the
repository. Fields are validated before anything is written, and doubt
lookups apply the visibility rule first so hidden doubts look absent (resolve
under the permissive policy is the one exception).
"""
import logging
import uuid
from typing import List, Optional

from doubtdesk.core.config import settings
from doubtdesk.core.exceptions import NotFound
from doubtdesk.domain import lifecycle, policy
from doubtdesk.domain.identity import Identity
from doubtdesk.domain.search import DoubtQuery, StatusFilter
from doubtdesk.domain.validation import validate_answer_content, validate_doubt
from doubtdesk.models.doubt import Answer, Doubt
from doubtdesk.repositories.doubt_repository import DoubtRepository

logger = logging.getLogger(__name__)


class DoubtService:
    """Canonical create/read/update/delete/answer/resolve operations."""

    def __init__(
        self,
        repository: DoubtRepository,
        resolve_policy: Optional[policy.ResolvePolicy] = None,
        lock_resolved_delete: Optional[bool] = None,
        search_limit: Optional[int] = None,
    ):
        self.repository = repository
        self.resolve_policy = policy.ResolvePolicy(resolve_policy or settings.RESOLVE_POLICY)
        self.lock_resolved_delete = (
            settings.LOCK_RESOLVED_DELETE if lock_resolved_delete is None else lock_resolved_delete
        )
        self.search_limit = search_limit or settings.SEARCH_RESULT_LIMIT

    def _visible_doubt(self, identity: Identity, doubt_id: uuid.UUID) -> Doubt:
        doubt = self.repository.get_doubt(doubt_id)
        if doubt is None:
            raise NotFound("Doubt not found.")
        policy.can_view_doubt(identity, doubt)
        return doubt

    def create_doubt(self, identity: Identity, title: Optional[str], content: Optional[str]) -> Doubt:
        policy.can_create_doubt(identity)
        title, content = validate_doubt(title, content)
        doubt = self.repository.create_doubt(title, content, identity.id)
        logger.info("Doubt %s created by %s", doubt.id, identity.id)
        return doubt

    def get_doubt(self, identity: Identity, doubt_id: uuid.UUID) -> Doubt:
        return self._visible_doubt(identity, doubt_id)

    def update_doubt(
        self,
        identity: Identity,
        doubt_id: uuid.UUID,
        title: Optional[str],
        content: Optional[str],
    ) -> Doubt:
        title, content = validate_doubt(title, content)
        doubt = self._visible_doubt(identity, doubt_id)
        policy.can_edit_doubt(identity, doubt)
        updated = self.repository.update_doubt(doubt.id, title=title, content=content)
        logger.info("Doubt %s edited by %s", doubt.id, identity.id)
        return updated

    def delete_doubt(self, identity: Identity, doubt_id: uuid.UUID) -> None:
        doubt = self._visible_doubt(identity, doubt_id)
        policy.can_delete_doubt(identity, doubt, lock_resolved=self.lock_resolved_delete)
        self.repository.delete_doubt(doubt.id)
        logger.info("Doubt %s deleted by %s", doubt.id, identity.id)

    def resolve_doubt(self, identity: Identity, doubt_id: uuid.UUID) -> Doubt:
        """Move a doubt to RESOLVED.

        Under ``ResolvePolicy.ANY`` any authenticated user may resolve any
        doubt, including another student's open one, so the visibility gate is
        skipped. The stricter policy keeps hiding doubts the caller cannot see.
        """
        if self.resolve_policy is policy.ResolvePolicy.ANY:
            doubt = self.repository.get_doubt(doubt_id)
            if doubt is None:
                raise NotFound("Doubt not found.")
        else:
            doubt = self._visible_doubt(identity, doubt_id)
        policy.can_resolve_doubt(identity, doubt, self.resolve_policy)
        next_status = lifecycle.resolve(doubt.status)
        resolved = self.repository.update_doubt(doubt.id, status=next_status)
        logger.info("Doubt %s resolved by %s", doubt.id, identity.id)
        return resolved

    def create_answer(self, identity: Identity, doubt_id: uuid.UUID, content: Optional[str]) -> Answer:
        policy.can_create_answer(identity)
        content = validate_answer_content(content)
        doubt = self._visible_doubt(identity, doubt_id)
        answer = self.repository.create_answer(doubt.id, content, identity.id)
        logger.info("Answer %s posted on doubt %s by %s", answer.id, doubt.id, identity.id)
        return answer

    def list_doubts(self, identity: Identity) -> List[Doubt]:
        """Every doubt visible to ``identity``, newest first, uncapped."""
        return self.repository.list_doubts(identity, DoubtQuery())

    def search_doubts(
        self,
        identity: Identity,
        text: str = "",
        status: StatusFilter = StatusFilter.ALL,
    ) -> List[Doubt]:
        query = DoubtQuery(text=text or "", status=StatusFilter(status), limit=self.search_limit)
        return self.repository.list_doubts(identity, query)
