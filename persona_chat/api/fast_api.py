"""
FastAPI Router: Persona Catalog, Chat Sessions, and Messages API

This module defines the HTTP API endpoints exposed by the backend. It handles:
- Persona catalog listing, category filtering, search and lookup
- Chat session creation/resumption and persona switching
- Messaging (send a message and get the persona's reply, fetch, clear)

Each endpoint validates input via Pydantic models and returns structured
responses. Errors raised by the flows (`persona_chat.api.errors`) are shaped
into `{message, errors?}` bodies by the handlers registered on the app.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from persona_chat.database.core import funcs
from persona_chat.database.core.storage import Storage
from persona_chat.api.errors import ValidationError
from persona_chat.api.llm_pipeline import ResponseGenerator
from persona_chat.api.models import (
    ErrorBody,
    MessageExchange,
    MessageOut,
    NewMessage,
    PersonaChange,
    PersonaOut,
    SessionCreate,
    SessionOut,
)

ERROR_RESPONSES = {
    400: {"model": ErrorBody, "description": "Invalid input"},
    404: {"model": ErrorBody, "description": "Persona or session not found"},
    500: {"model": ErrorBody, "description": "Internal server error"},
}

router = APIRouter(prefix="/api", responses=ERROR_RESPONSES)
"""Creates the FastAPI router in which we define its routes"""


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_generator(request: Request) -> ResponseGenerator:
    return request.app.state.generator


def parse_persona_id(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid persona ID")


@router.get("/personas", response_model=List[PersonaOut])
def list_personas(storage: Storage = Depends(get_storage)):
    """
    Fetch the whole persona catalog.

    Returns
    -------
    list[PersonaOut]
        Personas ordered by id.
    """
    return storage.personas.list_all()


@router.get("/personas/categories", response_model=List[str])
def list_categories():
    """Return the fixed list of persona categories."""
    return funcs.list_categories()


@router.get("/personas/category/{category}", response_model=List[PersonaOut])
def list_personas_by_category(category: str, storage: Storage = Depends(get_storage)):
    """
    Fetch the personas of one category.

    Returns
    -------
    list[PersonaOut]
        Possibly empty; an unknown category simply matches nothing.
    """
    return storage.personas.list_by_category(category)


@router.get("/personas/search", response_model=List[PersonaOut])
def search_personas(q: str = "", storage: Storage = Depends(get_storage)):
    """
    Search personas by name or description, ignoring case.

    Query Parameters
    ----------------
    q : str
        Free text. A blank query returns every persona.

    Returns
    -------
    list[PersonaOut]
        Matching personas; empty when nothing matches.
    """
    return storage.personas.search(q)


@router.get("/personas/{persona_id}", response_model=PersonaOut)
def get_persona(persona_id: str, storage: Storage = Depends(get_storage)):
    """
    Fetch one persona.

    Raises
    ------
    ValidationError (400)
        If the id is not numeric.
    NotFoundError (404)
        If no persona has this id.
    """
    return funcs.get_persona(storage, parse_persona_id(persona_id))


@router.post("/sessions", response_model=SessionOut)
def create_session(
    response: Response,
    data: Optional[SessionCreate] = None,
    storage: Storage = Depends(get_storage),
):
    """
    Create a chat session, or resume one by replaying its token.

    Request Body
    ------------
    SessionCreate {sessionId: str|None, personaId: int|None}, optional; no body
    starts a new session without a persona.

    Returns
    -------
    SessionOut
        201 when the session was created, 200 when an existing one is returned
        unchanged.

    Raises
    ------
    ValidationError (400)
        If the session token is malformed.
    NotFoundError (404)
        If a new session names a persona that does not exist.
    """
    if data is None:
        data = SessionCreate()
    session, created = funcs.create_or_resume_session(
        storage, session_id=data.session_id, persona_id=data.persona_id
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return session


@router.get("/sessions/{session_id}", response_model=SessionOut)
def get_session(session_id: str, storage: Storage = Depends(get_storage)):
    return funcs.get_session(storage, session_id)


@router.patch("/sessions/{session_id}/persona", response_model=SessionOut)
def change_persona(session_id: str, data: PersonaChange, storage: Storage = Depends(get_storage)):
    """
    Switch the persona of an existing session.

    A system message announcing the new persona is appended to the log.

    Request Body
    ------------
    PersonaChange {personaId: int}

    Raises
    ------
    NotFoundError (404)
        If the persona or the session does not exist.
    """
    return funcs.change_persona(storage, session_id, data.persona_id)


@router.get("/sessions/{session_id}/messages", response_model=List[MessageOut])
def get_messages(session_id: str, storage: Storage = Depends(get_storage)):
    """
    Fetch the messages of a session.

    Returns
    -------
    list[MessageOut]
        Messages in the order they were stored; empty if there are none.

    Raises
    ------
    NotFoundError (404)
        If the session does not exist.
    """
    return funcs.get_messages(storage, session_id)


@router.post(
    "/sessions/{session_id}/messages",
    response_model=MessageExchange,
    status_code=status.HTTP_201_CREATED,
    responses={503: {"model": ErrorBody, "description": "Reply generation failed"}},
)
async def send_message(
    session_id: str,
    data: NewMessage,
    storage: Storage = Depends(get_storage),
    generator: ResponseGenerator = Depends(get_generator),
):
    """
    Send a message to the session's persona and store its reply.

    Request Body
    ------------
    NewMessage {content: str}

    Returns
    -------
    MessageExchange
        {'userMessage': {...}, 'assistantMessage': {...}}

    Raises
    ------
    ValidationError (400)
        Empty content, or no persona selected for the session.
    NotFoundError (404)
        If the session or its persona does not exist.
    GeneratorUnavailable (503)
        If the reply could not be generated. The user message is kept.
    """
    user_message, assistant_message = await funcs.send_message(storage, generator, session_id, data.content)
    return MessageExchange(
        user_message=MessageOut.model_validate(user_message),
        assistant_message=MessageOut.model_validate(assistant_message),
    )


@router.delete("/sessions/{session_id}/messages", status_code=status.HTTP_204_NO_CONTENT)
def clear_messages(session_id: str, storage: Storage = Depends(get_storage)):
    """Delete the messages of a session. Succeeds even when there is nothing to clear."""
    funcs.clear_messages(storage, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
