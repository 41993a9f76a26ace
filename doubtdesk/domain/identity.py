"""Caller identity as seen by the access-control policy."""
import enum
import uuid
from dataclasses import dataclass


class Role(str, enum.Enum):
    """Closed set of user roles."""

    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"


@dataclass(frozen=True)
class Identity:
    """The resolved ``{id, role}`` pair for the acting user."""

    id: uuid.UUID
    role: Role
