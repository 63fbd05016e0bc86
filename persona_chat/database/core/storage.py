"""
Storage bundle passed to the chat flows.

A `Storage` groups the three repositories behind their protocols. It is
built once by the application factory and kept on `app.state`; tests build
as many independent instances as they need.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from persona_chat.database.config.config import Settings
from persona_chat.database.daos import ChatSessionDao, MessageDao, PersonaDao
from persona_chat.database.entities import Base
from persona_chat.database.interfaces import MessageRepository, PersonaCatalog, SessionRepository
from persona_chat.database.memory import InMemoryMessageRepository, InMemoryPersonaCatalog, InMemorySessionRepository
from persona_chat.database.records import Persona
from persona_chat.database.seed import PERSONAS


@dataclass
class Storage:
    personas: PersonaCatalog
    sessions: SessionRepository
    messages: MessageRepository
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_memory_storage(personas: Iterable[Persona] = PERSONAS) -> Storage:
    catalog = InMemoryPersonaCatalog(personas)
    sessions = InMemorySessionRepository(catalog)
    return Storage(personas=catalog, sessions=sessions, messages=InMemoryMessageRepository(sessions))


def create_db_engine(url: Union[str, URL]) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    url = make_url(url)
    kwargs = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # one connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def build_sql_storage(url: Union[str, URL], personas: Iterable[Persona] = PERSONAS) -> Storage:
    """Create the schema if needed and seed the catalog."""
    engine = create_db_engine(url)
    Base.metadata.create_all(engine)
    session_factory = sessionmaker(bind=engine)
    # StaticPool hands every thread the same sqlite3 connection
    lock = threading.Lock() if isinstance(engine.pool, StaticPool) else None
    catalog = PersonaDao(session_factory, lock)
    added = catalog.seed(personas)
    logger.info(f"catalog_seeded | backend=sql added={added}")
    return Storage(
        personas=catalog,
        sessions=ChatSessionDao(session_factory, lock),
        messages=MessageDao(session_factory, lock),
        engine=engine,
    )


def build_storage(settings: Settings) -> Storage:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return build_memory_storage()
    if backend == "sql":
        return build_sql_storage(settings.database_url)
    raise ValueError(f"Unknown STORAGE_BACKEND {settings.STORAGE_BACKEND!r}; expected 'memory' or 'sql'")
