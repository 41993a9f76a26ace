"""Visibility and authorization rules for doubts and answers.

Every ``can_*`` function returns ``None`` when the operation is allowed and
raises a :mod:`doubtdesk.core.exceptions` error otherwise. The ``is_*``
functions are the boolean forms used for filtering.

Role is coarse, so the rules reduce to ownership-or-instructor checks plus one
carve-out: resolved doubts form a knowledge base that every authenticated user
may read.
"""
import enum
from typing import Protocol
import uuid

from doubtdesk.core.exceptions import Conflict, Forbidden, NotFound
from doubtdesk.domain.identity import Identity, Role
from doubtdesk.domain.lifecycle import DoubtStatus, ensure_editable


class DoubtLike(Protocol):
    author_id: uuid.UUID
    status: DoubtStatus


class ResolvePolicy(str, enum.Enum):
    """Who may mark a doubt as resolved."""

    ANY = "any"
    AUTHOR_OR_INSTRUCTOR = "author_or_instructor"


def is_owner(identity: Identity, doubt: DoubtLike) -> bool:
    return identity.id == doubt.author_id


def is_owner_or_instructor(identity: Identity, doubt: DoubtLike) -> bool:
    match identity.role:
        case Role.INSTRUCTOR:
            return True
        case Role.STUDENT:
            return is_owner(identity, doubt)
    return False


def is_visible(identity: Identity, doubt: DoubtLike) -> bool:
    match identity.role:
        case Role.INSTRUCTOR:
            return True
        case Role.STUDENT:
            return is_owner(identity, doubt) or DoubtStatus(doubt.status) is DoubtStatus.RESOLVED
    return False


def can_create_doubt(identity: Identity) -> None:
    if identity.role is not Role.STUDENT:
        raise Forbidden("Only students can create doubts.")


def can_create_answer(identity: Identity, doubt: DoubtLike | None = None) -> None:
    if identity.role is not Role.INSTRUCTOR:
        raise Forbidden("Only instructors can answer doubts.")


def can_view_doubt(identity: Identity, doubt: DoubtLike) -> None:
    # Hidden rather than forbidden so other students' open doubts stay private
    if not is_visible(identity, doubt):
        raise NotFound("Doubt not found.")


def can_edit_doubt(identity: Identity, doubt: DoubtLike) -> None:
    if not is_owner_or_instructor(identity, doubt):
        raise Forbidden("You don't have permission to edit this doubt.")
    ensure_editable(doubt.status)


def can_delete_doubt(identity: Identity, doubt: DoubtLike, lock_resolved: bool = False) -> None:
    if not is_owner_or_instructor(identity, doubt):
        raise Forbidden("You don't have permission to delete this doubt.")
    if lock_resolved and DoubtStatus(doubt.status) is DoubtStatus.RESOLVED:
        raise Conflict("Resolved doubts are part of the knowledge base and cannot be deleted.")


def can_resolve_doubt(
    identity: Identity,
    doubt: DoubtLike,
    policy: ResolvePolicy = ResolvePolicy.ANY,
) -> None:
    match ResolvePolicy(policy):
        case ResolvePolicy.ANY:
            return
        case ResolvePolicy.AUTHOR_OR_INSTRUCTOR:
            if not is_owner_or_instructor(identity, doubt):
                raise Forbidden("You don't have permission to resolve this doubt.")


def can_request_suggestion(identity: Identity) -> None:
    if identity.role is not Role.INSTRUCTOR:
        raise Forbidden("Only instructors can use AI suggestions.")
