"""
Pydantic schemas for request/response validation.

Field names are snake_case in Python and camelCase on the wire
(`sessionId`, `currentPersonaId`, `imageUrl`, ...), matching the browser client.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from persona_chat.database.records import Category, Role


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PersonaOut(CamelModel):
    id: int
    name: str
    lifespan: str
    category: Category
    description: str
    image_url: str


class SessionCreate(CamelModel):
    session_id: Optional[str] = None
    persona_id: Optional[int] = None

    @field_validator("session_id", mode="before")
    @classmethod
    def blank_session_id_means_new(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value


class PersonaChange(CamelModel):
    persona_id: int


class SessionOut(CamelModel):
    session_id: str
    current_persona_id: Optional[int] = None
    created_at: datetime


class NewMessage(CamelModel):
    content: str = ""


class MessageOut(CamelModel):
    id: int
    session_id: str
    role: Role
    content: str
    persona_id: Optional[int] = None
    created_at: datetime


class MessageExchange(CamelModel):
    user_message: MessageOut
    assistant_message: MessageOut


class ErrorBody(BaseModel):
    message: str
    errors: Optional[List[Dict[str, Any]]] = None
