"""Doubt status state machine.

A doubt starts ``OPEN`` and may move once to ``RESOLVED``. There is no way
back. Posting an answer never changes the status.
"""
import enum

from doubtdesk.core.exceptions import Conflict


class DoubtStatus(str, enum.Enum):
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


INITIAL_STATUS = DoubtStatus.OPEN


def resolve(current: DoubtStatus) -> DoubtStatus:
    """Return the status a doubt takes after being resolved.

    Raises:
        Conflict: If the doubt is already resolved.
    """
    match DoubtStatus(current):
        case DoubtStatus.OPEN:
            return DoubtStatus.RESOLVED
        case DoubtStatus.RESOLVED:
            raise Conflict("This doubt has already been resolved.")


def ensure_editable(current: DoubtStatus) -> None:
    """Title and content are frozen once a doubt is resolved."""
    if DoubtStatus(current) is DoubtStatus.RESOLVED:
        raise Conflict("Resolved doubts can no longer be edited.")
