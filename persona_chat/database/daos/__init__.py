"""
The `daos` package provides the Data Access Layer for the application.

It is responsible for all interactions with the database entities,
encapsulating the operations that support the chat flows. Each DAO
operates on a specific entity and abstracts away the direct SQLAlchemy
queries, returning plain records (`database.records`) so the service
layer never touches ORM objects.

Contents
--------
- PersonaDao
    Read access to the persona catalog:
    * Lists personas, optionally by category
    * Case-insensitive search over name and description
    * Seeds the catalog on first start

- ChatSessionDao
    Manages chat session records:
    * Creates sessions (upsert by session token)
    * Fetches sessions by token
    * Updates the currently selected persona

- MessageDao
    Manages message records:
    * Appends messages to a session
    * Fetches messages by session (insertion order)
    * Clears a session's history
"""

from persona_chat.database.daos.persona_dao import PersonaDao
from persona_chat.database.daos.chat_session_dao import ChatSessionDao
from persona_chat.database.daos.message_dao import MessageDao

__all__ = ["PersonaDao", "ChatSessionDao", "MessageDao"]
