"""
Immutable domain records handed out by every repository implementation.

The in-memory store and the SQLAlchemy DAOs both return these, so the chat
flows and the HTTP layer never see ORM objects.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from persona_chat.api.errors import ValidationError


class Category(str, Enum):
    SCIENCE = "Science"
    PHILOSOPHY = "Philosophy"
    POLITICS = "Politics"
    ARTS = "Arts"
    LITERATURE = "Literature"
    EXPLORATION = "Exploration"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Persona:
    id: int
    name: str
    lifespan: str
    category: Category
    description: str
    image_url: str


@dataclass(frozen=True)
class ChatSession:
    session_id: str
    current_persona_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Message:
    id: int
    session_id: str
    role: Role
    content: str
    persona_id: Optional[int]
    created_at: datetime


def persona_matches(persona: Persona, query: str) -> bool:
    """Case-insensitive substring match on name or description."""
    needle = query.casefold()
    return needle in persona.name.casefold() or needle in persona.description.casefold()


SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")


def new_session_id() -> str:
    return uuid4().hex


def check_session_id(session_id: str) -> str:
    """Raise `ValidationError` unless `session_id` is a well-formed token."""
    if not isinstance(session_id, str) or not SESSION_ID_PATTERN.fullmatch(session_id):
        raise ValidationError(
            "Invalid session data",
            errors=[{
                "loc": ["sessionId"],
                "msg": "must be 1-64 characters of letters, digits, '_' or '-'",
                "type": "value_error",
            }],
        )
    return session_id


def check_content(content: str) -> str:
    if not isinstance(content, str) or not content.strip():
        raise ValidationError(
            "Message content is required",
            errors=[{"loc": ["content"], "msg": "must not be empty", "type": "value_error"}],
        )
    return content


def check_role(role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(
            "Invalid message data",
            errors=[{"loc": ["role"], "msg": f"must be one of {[r.value for r in Role]}", "type": "enum"}],
        ) from None
