from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from persona_chat.database.records import utcnow
from persona_chat.database.entities.base import Base


class ChatSessionEntity(Base):
    __tablename__ = "chat_sessions"

    session_id = Column(String(64), primary_key=True)
    current_persona_id = Column(Integer, ForeignKey("personas.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
