import pytest
from fastapi.testclient import TestClient

from persona_chat.api.errors import GeneratorUnavailable
from persona_chat.database.config.config import Settings
from persona_chat.database.core.storage import build_memory_storage, build_sql_storage
from persona_chat.main import create_app


class EchoGenerator:
    """Replies without any network call and remembers what it was asked."""

    def __init__(self):
        self.calls = []

    async def generate(self, persona, history, user_text):
        self.calls.append((persona, list(history), user_text))
        return f"{persona.name} says: you told me '{user_text}'"


class FailingGenerator:
    def __init__(self):
        self.calls = 0

    async def generate(self, persona, history, user_text):
        self.calls += 1
        raise GeneratorUnavailable("Unable to generate response from AI service. Please try again later.")


@pytest.fixture
def settings():
    return Settings(_env_file=None, OPENAI_API_KEY="", STORAGE_BACKEND="memory", LOG_LEVEL="WARNING")


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    if request.param == "memory":
        store = build_memory_storage()
    else:
        store = build_sql_storage("sqlite://")
    yield store
    store.close()


@pytest.fixture
def generator():
    return EchoGenerator()


@pytest.fixture
def failing_generator():
    return FailingGenerator()


@pytest.fixture
def client(settings, generator):
    app = create_app(settings=settings, storage=build_memory_storage(), generator=generator)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_client(settings, failing_generator):
    app = create_app(settings=settings, storage=build_memory_storage(), generator=failing_generator)
    with TestClient(app) as test_client:
        yield test_client
