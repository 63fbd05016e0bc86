"""llm_pipeline
=================

Persona response generation on top of LangChain's ``ChatOpenAI``.

The pipeline turns a persona profile, the prior conversation and the new user
text into a single in-character reply. It is the only part of a request that
waits on the network, so it is fully ``async`` and bounded by a timeout.

Every failure mode (provider/network error, timeout, empty completion, missing
API key) is reported as :class:`~persona_chat.api.errors.GeneratorUnavailable`
so the router can answer 503 instead of a generic server error.

Environment/Settings
--------------------
- ``OPENAI_API_KEY``: OpenAI API key
- ``OPEN_AI_MODEL``: chat model name for ``ChatOpenAI``
- ``MODEL_TEMPERATURE``: sampling temperature
- ``MAX_HISTORY_MESSAGES``: how many prior turns are forwarded
- ``GENERATION_TIMEOUT_SECONDS``: upper bound per call
"""

import asyncio
import time
from typing import List, Optional, Protocol, Sequence, Tuple

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from loguru import logger

from persona_chat.database.config.config import Settings
from persona_chat.database.records import Persona, Role
from persona_chat.api.errors import GeneratorUnavailable

PERSONA_PROMPT = """You are {name} ({lifespan}), {description}

Stay in character at all times and answer in the first person, the way {name} would have spoken.
Draw on what {name} knew and believed during their lifetime; if asked about later events,
react with curiosity from your own historical perspective rather than claiming knowledge of them.
Keep replies conversational and concise, a few short paragraphs at most.
Never mention that you are an AI or a language model."""

UNAVAILABLE_MESSAGE = "Unable to generate response from AI service. Please try again later."


class ResponseGenerator(Protocol):
    async def generate(
        self, persona: Persona, history: Sequence[Tuple[str, str]], user_text: str
    ) -> str: ...


def build_persona_prompt(persona: Persona) -> str:
    """Render the system prompt that puts the model in character."""
    return PERSONA_PROMPT.format(
        name=persona.name,
        lifespan=persona.lifespan,
        description=persona.description,
    )


def to_lc_messages(history: Sequence[Tuple[str, str]], max_messages: Optional[int] = None) -> List[BaseMessage]:
    """Convert ``(role, content)`` pairs to LangChain messages, dropping system entries."""
    turns = [(role, content) for role, content in history if role != Role.SYSTEM.value and content]
    if max_messages is not None:
        turns = turns[-max_messages:] if max_messages > 0 else []
    messages: List[BaseMessage] = []
    for role, content in turns:
        if role == Role.ASSISTANT.value:
            messages.append(AIMessage(content=content))
        else:
            messages.append(HumanMessage(content=content))
    return messages


class PersonaResponseGenerator:
    """Generate in-character replies with a LangChain chat model.

    Args:
        chat_model: Any LangChain chat model. ``None`` means the service is not
            configured and every call fails with ``GeneratorUnavailable``.
        timeout: Seconds before a call is abandoned and treated as failed.
        max_history: Most recent prior turns forwarded to the model.
    """

    def __init__(self, chat_model: Optional[BaseChatModel], timeout: float = 30.0, max_history: int = 20):
        self.chat_model = chat_model
        self.timeout = timeout
        self.max_history = max_history

    def build_messages(
        self, persona: Persona, history: Sequence[Tuple[str, str]], user_text: str
    ) -> List[BaseMessage]:
        return [
            SystemMessage(content=build_persona_prompt(persona)),
            *to_lc_messages(history, self.max_history),
            HumanMessage(content=user_text),
        ]

    async def generate(
        self, persona: Persona, history: Sequence[Tuple[str, str]], user_text: str
    ) -> str:
        """Return the persona's reply to ``user_text``.

        Args:
            persona: The persona to speak as.
            history: Prior ``(role, content)`` pairs, oldest first, excluding
                ``user_text`` itself.
            user_text: The message the user just sent.

        Returns:
            str: Non-empty assistant text.

        Raises:
            GeneratorUnavailable: On any provider failure, timeout or empty reply.
        """
        if self.chat_model is None:
            logger.error("llm_unconfigured | OPENAI_API_KEY not set; cannot generate replies")
            raise GeneratorUnavailable(UNAVAILABLE_MESSAGE)

        messages = self.build_messages(persona, history, user_text)
        t0 = time.perf_counter()
        try:
            result = await asyncio.wait_for(self.chat_model.ainvoke(messages), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"llm_timeout | persona={persona.id} timeout={self.timeout:.1f}s")
            raise GeneratorUnavailable(UNAVAILABLE_MESSAGE)
        except Exception as e:
            logger.warning(f"llm_failed | persona={persona.id} | {type(e).__name__}: {e}")
            raise GeneratorUnavailable(UNAVAILABLE_MESSAGE) from e
        dt = time.perf_counter() - t0

        content = result.content if hasattr(result, "content") else str(result)
        text = (content if isinstance(content, str) else str(content)).strip()
        if not text:
            logger.warning(f"llm_empty_reply | persona={persona.id} dt={dt:.2f}s")
            raise GeneratorUnavailable(UNAVAILABLE_MESSAGE)
        logger.info(f"llm_call | persona={persona.id} history={len(messages) - 2} dt={dt:.2f}s")
        return text


def build_generator(settings: Settings) -> PersonaResponseGenerator:
    """Create the generator configured by ``settings``."""
    chat_model = None
    if settings.OPENAI_API_KEY:
        logger.debug(f"llm_init | model={settings.OPEN_AI_MODEL} temperature={settings.MODEL_TEMPERATURE}")
        chat_model = ChatOpenAI(
            model=settings.OPEN_AI_MODEL,
            api_key=settings.OPENAI_API_KEY,
            temperature=settings.MODEL_TEMPERATURE,
        )
    else:
        logger.warning("llm_init | OPENAI_API_KEY not set; chat replies will be unavailable")
    return PersonaResponseGenerator(
        chat_model,
        timeout=settings.GENERATION_TIMEOUT_SECONDS,
        max_history=settings.MAX_HISTORY_MESSAGES,
    )
