"""Search and filtering over doubts.

The same rules are available in two forms: :func:`search` filters doubts
already in memory, :func:`build_statement` produces the equivalent SQLAlchemy
query for the repository. Both apply, in order:

1. the caller's visible set (see :func:`doubtdesk.domain.policy.is_visible`)
2. the status filter, unless ``ALL``
3. a case-insensitive substring match on title or content
4. newest first
5. an optional result cap
"""
import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import joinedload, selectinload

from doubtdesk.domain.identity import Identity, Role
from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.domain.policy import is_visible
from doubtdesk.models.doubt import Answer, Doubt


class StatusFilter(str, enum.Enum):
    ALL = "ALL"
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


@dataclass(frozen=True)
class DoubtQuery:
    text: str = ""
    status: StatusFilter = StatusFilter.ALL
    limit: Optional[int] = None

    @property
    def needle(self) -> str:
        return self.text.strip()


def matches(identity: Identity, doubt, query: DoubtQuery) -> bool:
    if not is_visible(identity, doubt):
        return False
    if query.status is not StatusFilter.ALL and DoubtStatus(doubt.status).value != query.status.value:
        return False
    needle = query.needle.lower()
    if needle and needle not in doubt.title.lower() and needle not in doubt.content.lower():
        return False
    return True


def search(identity: Identity, doubts: Iterable, query: DoubtQuery) -> list:
    found = [d for d in doubts if matches(identity, d, query)]
    found.sort(key=lambda d: d.created_at, reverse=True)
    if query.limit is not None:
        found = found[: query.limit]
    return found


def build_statement(identity: Identity, query: DoubtQuery) -> Select:
    """Build the SELECT returning the doubts ``identity`` may see for ``query``.

    Answers (oldest first) and their authors are eager loaded so results can be
    serialized after the session closes.
    """
    stmt = select(Doubt).options(
        joinedload(Doubt.author),
        selectinload(Doubt.answers).joinedload(Answer.author),
    ).execution_options(populate_existing=True)

    match identity.role:
        case Role.STUDENT:
            stmt = stmt.where(or_(Doubt.author_id == identity.id, Doubt.status == DoubtStatus.RESOLVED))
        case Role.INSTRUCTOR:
            pass

    if query.status is not StatusFilter.ALL:
        stmt = stmt.where(Doubt.status == DoubtStatus(query.status.value))

    if query.needle:
        stmt = stmt.where(
            or_(
                Doubt.title.icontains(query.needle, autoescape=True),
                Doubt.content.icontains(query.needle, autoescape=True),
            )
        )

    stmt = stmt.order_by(Doubt.created_at.desc())
    if query.limit is not None:
        stmt = stmt.limit(query.limit)
    return stmt
