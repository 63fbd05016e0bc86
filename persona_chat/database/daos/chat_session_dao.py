from datetime import timezone
from typing import Optional, Tuple

from loguru import logger
from sqlalchemy.exc import IntegrityError

from persona_chat.api.errors import NotFoundError
from persona_chat.database.daos.base_dao import BaseDao
from persona_chat.database.entities import ChatSessionEntity, PersonaEntity
from persona_chat.database.records import ChatSession, check_session_id, new_session_id


def to_chat_session(entity: ChatSessionEntity) -> ChatSession:
    created_at = entity.created_at
    # SQLite drops tzinfo on the way back
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return ChatSession(
        session_id=entity.session_id,
        current_persona_id=entity.current_persona_id,
        created_at=created_at,
    )


class ChatSessionDao(BaseDao):
    """Chat sessions backed by the `chat_sessions` table."""

    def create(
        self, session_id: Optional[str] = None, persona_id: Optional[int] = None
    ) -> Tuple[ChatSession, bool]:
        """
        Create a chat session, or return the stored one unchanged.

        Parameters
        ----------
        session_id : str | None
            Client-supplied token; a new one is generated when omitted.
        persona_id : int | None
            Persona to bind when the session is created.

        Returns
        -------
        tuple[ChatSession, bool]
            The session and whether it was created by this call.

        Raises
        ------
        ValidationError
            If `session_id` is malformed.
        NotFoundError
            If `persona_id` does not name a persona.
        """
        if session_id is None:
            session_id = new_session_id()
        check_session_id(session_id)
        with self.unit_of_work() as db:
            existing = db.get(ChatSessionEntity, session_id)
            if existing is not None:
                return to_chat_session(existing), False
            if persona_id is not None and db.get(PersonaEntity, persona_id) is None:
                raise NotFoundError("Persona not found")
            entity = ChatSessionEntity(session_id=session_id, current_persona_id=persona_id)
            db.add(entity)
            try:
                db.commit()
            except IntegrityError:
                # another request created the same token first
                db.rollback()
                logger.debug(f"session_create_race | session_id={session_id}")
                return to_chat_session(db.get(ChatSessionEntity, session_id)), False
            db.refresh(entity)
            return to_chat_session(entity), True

    def get(self, session_id: str) -> Optional[ChatSession]:
        with self.unit_of_work() as db:
            entity = db.get(ChatSessionEntity, session_id)
            return to_chat_session(entity) if entity is not None else None

    def set_persona(self, session_id: str, persona_id: int) -> ChatSession:
        with self.unit_of_work() as db:
            if db.get(PersonaEntity, persona_id) is None:
                raise NotFoundError("Persona not found")
            entity = db.get(ChatSessionEntity, session_id)
            if entity is None:
                raise NotFoundError("Chat session not found")
            entity.current_persona_id = persona_id
            db.commit()
            db.refresh(entity)
            return to_chat_session(entity)
