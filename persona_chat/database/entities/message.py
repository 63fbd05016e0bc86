from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from persona_chat.database.records import utcnow
from persona_chat.database.entities.base import Base


class MessageEntity(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(64), ForeignKey("chat_sessions.session_id"), nullable=False, index=True)
    role = Column(String(16), nullable=False)  # user / assistant / system
    content = Column(Text, nullable=False)
    persona_id = Column(Integer, ForeignKey("personas.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
