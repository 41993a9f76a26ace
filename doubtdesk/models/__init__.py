"""Database models."""
from doubtdesk.models.user import User
from doubtdesk.models.doubt import Doubt, Answer

__all__ = [
    "User",
    "Doubt",
    "Answer",
]
