"""
Purpose: Persona catalog, session and message storage held in process memory.
Why: Zero-setup backend for local development and tests; each instance is
independent, so tests can build as many isolated stores as they need.

What is inside:
InMemoryPersonaCatalog, InMemorySessionRepository, InMemoryMessageRepository.
Writes are serialized with a lock so message order always equals append order.
"""

import itertools
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from persona_chat.api.errors import NotFoundError, ValidationError
from persona_chat.database.records import (
    ChatSession,
    Message,
    Persona,
    Role,
    check_content,
    check_role,
    check_session_id,
    new_session_id,
    persona_matches,
    utcnow,
)


class InMemoryPersonaCatalog:
    def __init__(self, personas: Iterable[Persona] = ()) -> None:
        self._personas: Dict[int, Persona] = {}
        self.seed(personas)

    def seed(self, personas: Iterable[Persona]) -> int:
        """Load personas that are not already present; returns how many were added."""
        added = 0
        for persona in personas:
            if persona.id not in self._personas:
                self._personas[persona.id] = persona
                added += 1
        return added

    def list_all(self) -> List[Persona]:
        return [self._personas[key] for key in sorted(self._personas)]

    def list_by_category(self, category: str) -> List[Persona]:
        return [p for p in self.list_all() if p.category.value == category]

    def search(self, query: str) -> List[Persona]:
        if not query or not query.strip():
            return self.list_all()
        return [p for p in self.list_all() if persona_matches(p, query)]

    def get_by_id(self, persona_id: int) -> Optional[Persona]:
        return self._personas.get(persona_id)


class InMemorySessionRepository:
    def __init__(self, catalog: InMemoryPersonaCatalog) -> None:
        self._catalog = catalog
        self._sessions: Dict[str, ChatSession] = {}
        self._lock = threading.Lock()

    def _require_persona(self, persona_id: int) -> None:
        if self._catalog.get_by_id(persona_id) is None:
            raise NotFoundError("Persona not found")

    def create(
        self, session_id: Optional[str] = None, persona_id: Optional[int] = None
    ) -> Tuple[ChatSession, bool]:
        """Create a session, or return the existing one unchanged when the id is known."""
        if session_id is None:
            session_id = new_session_id()
        check_session_id(session_id)
        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is not None:
                return existing, False
            if persona_id is not None:
                self._require_persona(persona_id)
            session = ChatSession(session_id=session_id, current_persona_id=persona_id, created_at=utcnow())
            self._sessions[session_id] = session
        logger.debug(f"session_created | backend=memory session_id={session_id}")
        return session, True

    def get(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.get(session_id)

    def set_persona(self, session_id: str, persona_id: int) -> ChatSession:
        self._require_persona(persona_id)
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise NotFoundError("Chat session not found")
            updated = ChatSession(
                session_id=session.session_id,
                current_persona_id=persona_id,
                created_at=session.created_at,
            )
            self._sessions[session_id] = updated
        return updated


class InMemoryMessageRepository:
    def __init__(self, sessions: InMemorySessionRepository) -> None:
        self._sessions = sessions
        self._messages: Dict[str, List[Message]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def append(
        self,
        session_id: str,
        role: Role | str,
        content: str,
        persona_id: Optional[int] = None,
    ) -> Message:
        role = check_role(role)
        check_content(content)
        if self._sessions.get(session_id) is None:
            raise ValidationError(
                "Invalid message data",
                errors=[{"loc": ["sessionId"], "msg": "chat session does not exist", "type": "value_error"}],
            )
        with self._lock:
            message = Message(
                id=next(self._ids),
                session_id=session_id,
                role=role,
                content=content,
                persona_id=persona_id,
                created_at=utcnow(),
            )
            self._messages.setdefault(session_id, []).append(message)
        return message

    def list_by_session(self, session_id: str) -> List[Message]:
        with self._lock:
            return list(self._messages.get(session_id, ()))

    def clear_by_session(self, session_id: str) -> None:
        with self._lock:
            self._messages.pop(session_id, None)
