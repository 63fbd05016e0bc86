from sqlalchemy import Column, Integer, String, Text

from persona_chat.database.entities.base import Base


class PersonaEntity(Base):
    __tablename__ = "personas"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    lifespan = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False, default="")
