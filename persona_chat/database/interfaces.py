"""
Repository capabilities the chat flows depend on. Protocols describe what a
store can do without saying how, so the in-memory store and the SQLAlchemy
DAOs can be swapped without touching the router.

Common protocols:
- PersonaCatalog.list_all() / list_by_category(category) / search(query) / get_by_id(id)
- SessionRepository.create(session_id, persona_id) / get(session_id) / set_persona(session_id, persona_id)
- MessageRepository.append(...) / list_by_session(session_id) / clear_by_session(session_id)

Testing: each implementation runs the same behavioural tests.
"""

from typing import Iterable, Optional, Protocol, Tuple

from persona_chat.database.records import ChatSession, Message, Persona, Role


class PersonaCatalog(Protocol):
    def list_all(self) -> list[Persona]: ...

    def list_by_category(self, category: str) -> list[Persona]: ...

    def search(self, query: str) -> list[Persona]: ...

    def get_by_id(self, persona_id: int) -> Optional[Persona]: ...

    def seed(self, personas: Iterable[Persona]) -> int: ...


class SessionRepository(Protocol):
    def create(
        self, session_id: Optional[str] = None, persona_id: Optional[int] = None
    ) -> Tuple[ChatSession, bool]: ...

    def get(self, session_id: str) -> Optional[ChatSession]: ...

    def set_persona(self, session_id: str, persona_id: int) -> ChatSession: ...


class MessageRepository(Protocol):
    def append(
        self,
        session_id: str,
        role: Role | str,
        content: str,
        persona_id: Optional[int] = None,
    ) -> Message: ...

    def list_by_session(self, session_id: str) -> list[Message]: ...

    def clear_by_session(self, session_id: str) -> None: ...
