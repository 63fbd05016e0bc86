import asyncio

import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from persona_chat.api.errors import GeneratorUnavailable
from persona_chat.api.llm_pipeline import (
    PersonaResponseGenerator,
    build_generator,
    build_persona_prompt,
    to_lc_messages,
)
from persona_chat.database.config.config import Settings
from persona_chat.database.seed import PERSONAS

LINCOLN = next(p for p in PERSONAS if p.name == "Abraham Lincoln")


class BrokenChatModel:
    async def ainvoke(self, messages):
        raise ConnectionError("provider down")


class SlowChatModel:
    async def ainvoke(self, messages):
        await asyncio.sleep(5)
        return AIMessage(content="too late")


def generate(generator, history=(), text="Hello"):
    return asyncio.run(generator.generate(LINCOLN, list(history), text))


def test_persona_prompt_names_the_persona():
    prompt = build_persona_prompt(LINCOLN)
    assert "Abraham Lincoln" in prompt
    assert "1809-1865" in prompt


def test_to_lc_messages_maps_roles_and_drops_system():
    history = [("user", "hi"), ("system", "You are now chatting with X."), ("assistant", "hello")]
    messages = to_lc_messages(history)
    assert [type(m) for m in messages] == [HumanMessage, AIMessage]


def test_to_lc_messages_keeps_most_recent():
    history = [("user", str(i)) for i in range(10)]
    assert [m.content for m in to_lc_messages(history, max_messages=3)] == ["7", "8", "9"]
    assert to_lc_messages(history, max_messages=0) == []


def test_build_messages_order():
    generator = PersonaResponseGenerator(FakeListChatModel(responses=["ok"]))
    messages = generator.build_messages(LINCOLN, [("user", "a"), ("assistant", "b")], "c")
    assert isinstance(messages[0], SystemMessage)
    assert [m.content for m in messages[1:]] == ["a", "b", "c"]
    assert isinstance(messages[-1], HumanMessage)


def test_generate_returns_model_text():
    generator = PersonaResponseGenerator(FakeListChatModel(responses=["  Four score and seven years ago.  "]))
    assert generate(generator) == "Four score and seven years ago."


def test_provider_failure_is_generator_unavailable():
    with pytest.raises(GeneratorUnavailable):
        generate(PersonaResponseGenerator(BrokenChatModel()))


def test_timeout_is_generator_unavailable():
    with pytest.raises(GeneratorUnavailable):
        generate(PersonaResponseGenerator(SlowChatModel(), timeout=0.01))


def test_empty_reply_is_generator_unavailable():
    with pytest.raises(GeneratorUnavailable):
        generate(PersonaResponseGenerator(FakeListChatModel(responses=["   "])))


def test_unconfigured_generator_fails_cleanly():
    generator = build_generator(Settings(_env_file=None, OPENAI_API_KEY=""))
    assert generator.chat_model is None
    with pytest.raises(GeneratorUnavailable):
        generate(generator)


def test_build_generator_uses_settings():
    settings = Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        OPEN_AI_MODEL="gpt-4o-mini",
        GENERATION_TIMEOUT_SECONDS=12.5,
        MAX_HISTORY_MESSAGES=6,
    )
    generator = build_generator(settings)
    assert generator.chat_model.model_name == "gpt-4o-mini"
    assert generator.timeout == 12.5
    assert generator.max_history == 6
