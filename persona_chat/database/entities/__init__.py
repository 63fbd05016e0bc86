"""
The `entities` package defines the ORM models of the application,
representing the database tables as Python classes via SQLAlchemy.

These entity classes are the foundation of the persistence layer,
used by DAOs (`daos` package) to perform CRUD operations.

Contents
--------
- PersonaEntity
    Represents a historical persona of the catalog.
    * Stores name, lifespan label, category and description
    * Holds the image reference shown by the client

- ChatSessionEntity
    Represents a client chat session.
    * Stores the opaque session token (primary key)
    * Tracks the currently selected persona (nullable) and creation time

- MessageEntity
    Represents a single message within a chat session.
    * Stores message text, role (user/assistant/system)
    * Records the persona active when it was produced
    * Autoincrement id doubles as the per-session ordering key
"""

from persona_chat.database.entities.base import Base
from persona_chat.database.entities.persona import PersonaEntity
from persona_chat.database.entities.chat_session import ChatSessionEntity
from persona_chat.database.entities.message import MessageEntity

__all__ = ["Base", "PersonaEntity", "ChatSessionEntity", "MessageEntity"]
