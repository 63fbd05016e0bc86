import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from persona_chat.api.errors import register_error_handlers
from persona_chat.api.fast_api import router
from persona_chat.api.llm_pipeline import ResponseGenerator, build_generator
from persona_chat.database.config.config import Settings, get_settings
from persona_chat.database.core.storage import Storage, build_storage


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), colorize=True, format="{time:HH:mm:ss} | {level} | {message}")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    generator: Optional[ResponseGenerator] = None,
) -> FastAPI:
    """Build the application. Storage and generator default to what `settings` configures."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.storage = storage or build_storage(settings)
        app.state.generator = generator or build_generator(settings)
        logger.info(
            f"app_start | backend={settings.STORAGE_BACKEND} model={settings.OPEN_AI_MODEL} "
            f"personas={len(app.state.storage.personas.list_all())}"
        )
        yield
        app.state.storage.close()
        logger.info("app_stop")

    app = FastAPI(title="Persona Chat", version="1.0.0", lifespan=lifespan)

    origins = ["*"] if settings.FRONTEND_URL == "*" else [settings.FRONTEND_URL]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("persona_chat.main:create_app", factory=True, host="0.0.0.0", port=8000)
