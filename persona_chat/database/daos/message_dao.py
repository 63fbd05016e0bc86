from datetime import timezone
from typing import List, Optional

from sqlalchemy import delete, select

from persona_chat.api.errors import ValidationError
from persona_chat.database.daos.base_dao import BaseDao
from persona_chat.database.entities import ChatSessionEntity, MessageEntity
from persona_chat.database.records import Message, Role, check_content, check_role


def to_message(entity: MessageEntity) -> Message:
    created_at = entity.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Message(
        id=entity.id,
        session_id=entity.session_id,
        role=Role(entity.role),
        content=entity.content,
        persona_id=entity.persona_id,
        created_at=created_at,
    )


class MessageDao(BaseDao):
    """Append-only message log backed by the `messages` table."""

    def append(
        self,
        session_id: str,
        role: Role | str,
        content: str,
        persona_id: Optional[int] = None,
    ) -> Message:
        role = check_role(role)
        check_content(content)
        with self.unit_of_work() as db:
            if db.get(ChatSessionEntity, session_id) is None:
                raise ValidationError(
                    "Invalid message data",
                    errors=[{"loc": ["sessionId"], "msg": "chat session does not exist", "type": "value_error"}],
                )
            entity = MessageEntity(
                session_id=session_id,
                role=role.value,
                content=content,
                persona_id=persona_id,
            )
            db.add(entity)
            db.commit()
            db.refresh(entity)
            return to_message(entity)

    def list_by_session(self, session_id: str) -> List[Message]:
        """Messages of a session in insertion order (autoincrement id)."""
        with self.unit_of_work() as db:
            rows = db.scalars(
                select(MessageEntity)
                .where(MessageEntity.session_id == session_id)
                .order_by(MessageEntity.id)
            ).all()
            return [to_message(row) for row in rows]

    def clear_by_session(self, session_id: str) -> None:
        with self.unit_of_work() as db:
            db.execute(delete(MessageEntity).where(MessageEntity.session_id == session_id))
            db.commit()
