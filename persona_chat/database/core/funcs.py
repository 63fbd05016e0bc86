"""
Session and message flows called by the HTTP router.

Each function takes the `Storage` it works on explicitly. Existence checks
are explicit lookups made before any write; nothing is rolled back when a
later step fails, so a user message stays in the log when generation fails
and the client can simply resend.
"""

from typing import List, Optional, Tuple

from loguru import logger
from fastapi.concurrency import run_in_threadpool

from persona_chat.api.errors import NotFoundError, ValidationError
from persona_chat.api.llm_pipeline import ResponseGenerator
from persona_chat.database.records import Category, ChatSession, Message, Persona, Role, check_content
from persona_chat.database.core.storage import Storage


def persona_change_notice(persona: Persona) -> str:
    return f"You are now chatting with {persona.name}."


def list_categories() -> List[str]:
    return [category.value for category in Category]


def get_persona(storage: Storage, persona_id: int) -> Persona:
    persona = storage.personas.get_by_id(persona_id)
    if persona is None:
        raise NotFoundError("Persona not found")
    return persona


def create_or_resume_session(
    storage: Storage, session_id: Optional[str] = None, persona_id: Optional[int] = None
) -> Tuple[ChatSession, bool]:
    """
    Create a session or resume an existing one by its token.

    Returns
    -------
    tuple[ChatSession, bool]
        The session and whether it was newly created. A resumed session is
        returned unchanged, whatever `persona_id` was sent.
    """
    session, created = storage.sessions.create(session_id=session_id, persona_id=persona_id)
    if created:
        logger.info(f"session_created | session_id={session.session_id} persona={session.current_persona_id}")
    else:
        logger.info(f"session_resumed | session_id={session.session_id}")
    return session, created


def get_session(storage: Storage, session_id: str) -> ChatSession:
    session = storage.sessions.get(session_id)
    if session is None:
        raise NotFoundError("Chat session not found")
    return session


def change_persona(storage: Storage, session_id: str, persona_id: int) -> ChatSession:
    """Switch the session's persona and record the switch as a system message."""
    persona = get_persona(storage, persona_id)
    get_session(storage, session_id)
    session = storage.sessions.set_persona(session_id, persona_id)
    storage.messages.append(session_id, Role.SYSTEM, persona_change_notice(persona), persona_id)
    logger.info(f"persona_changed | session_id={session_id} persona={persona_id}")
    return session


def get_messages(storage: Storage, session_id: str) -> List[Message]:
    get_session(storage, session_id)
    return storage.messages.list_by_session(session_id)


async def send_message(
    storage: Storage, generator: ResponseGenerator, session_id: str, content: str
) -> Tuple[Message, Message]:
    """
    Store the user's message, ask the persona for a reply and store it too.

    Storage calls run in the thread pool; only the generator call awaits on
    the event loop.

    Raises
    ------
    ValidationError
        Empty content, or no persona selected for the session.
    NotFoundError
        Session or its persona does not exist.
    GeneratorUnavailable
        The reply could not be generated; the user message is kept.
    """
    check_content(content)
    session = await run_in_threadpool(get_session, storage, session_id)
    if session.current_persona_id is None:
        raise ValidationError("No persona selected for this chat session")
    persona = await run_in_threadpool(get_persona, storage, session.current_persona_id)

    user_message = await run_in_threadpool(storage.messages.append, session_id, Role.USER, content, persona.id)

    stored = await run_in_threadpool(storage.messages.list_by_session, session_id)
    history = [
        (message.role.value, message.content)
        for message in stored
        if message.role is not Role.SYSTEM and message.id < user_message.id
    ]
    reply = await generator.generate(persona, history, content)

    assistant_message = await run_in_threadpool(storage.messages.append, session_id, Role.ASSISTANT, reply, persona.id)
    return user_message, assistant_message


def clear_messages(storage: Storage, session_id: str) -> None:
    storage.messages.clear_by_session(session_id)
    logger.info(f"messages_cleared | session_id={session_id}")
