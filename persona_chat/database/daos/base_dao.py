from contextlib import contextmanager, nullcontext
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker


class BaseDao:
    """
    Common plumbing for the DAOs.

    Parameters
    ----------
    session_factory : sessionmaker
        Factory for the SQLAlchemy sessions each call opens and closes.
    lock : threading.Lock | None
        Held around every unit of work when all threads share a single
        connection (in-memory SQLite); `None` leaves concurrency to the database.
    """

    def __init__(self, session_factory: sessionmaker, lock=None):
        self.session_factory = session_factory
        self.lock = lock if lock is not None else nullcontext()

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        with self.lock, self.session_factory() as db:
            yield db
