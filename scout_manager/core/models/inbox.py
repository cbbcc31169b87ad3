"""Inbox messages produced by the engines."""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional


class MessageType(PyEnum):
    """Categories of inbox messages."""
    FEEDBACK = "feedback"
    WARNING = "warning"
    NEWS = "news"
    DIRECTIVE = "directive"
    NEGOTIATION = "negotiation"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class InboxMessage:
    """A single message delivered to the scout's inbox."""
    id: str
    week: int
    season: int
    type: MessageType
    title: str
    body: str
    read: bool = False
    action_required: bool = False

    # Related entity
    related_id: Optional[str] = None
    related_entity_type: Optional[str] = None  # e.g. "negotiation", "club", "player"
