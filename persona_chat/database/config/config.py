from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str = ""
    """OpenAI API key used by the response generator."""

    OPEN_AI_MODEL: str = "gpt-4o-mini"
    """OpenAI model name (e.g., `gpt-4o-mini`)."""

    MODEL_TEMPERATURE: float = 0.7
    """Sampling temperature for persona replies."""

    MAX_HISTORY_MESSAGES: int = 20
    """Number of prior conversation turns forwarded to the model."""

    GENERATION_TIMEOUT_SECONDS: float = 30.0
    """Upper bound on a single generator call before it counts as failed."""

    STORAGE_BACKEND: str = "memory"
    """Storage backend: `memory` or `sql`."""

    DB_DRIVER_NAME: str = "sqlite"
    """Database driver (e.g., `postgresql+psycopg`, `sqlite`)."""

    DB_USERNAME: str | None = None
    """Database username credential."""

    DB_PASSWORD: str | None = None
    """Database password credential."""

    DB_HOST: str | None = None
    """Hostname or IP address of the database server."""

    DB_DATABASE_NAME: str = "persona_chat.db"
    """Name of the application's database (file path for SQLite)."""

    FRONTEND_URL: str = "*"
    """Origin of the frontend client allowed by CORS."""

    LOG_LEVEL: str = "INFO"
    """Minimum level emitted by the application logger."""

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL assembled from the `DB_*` values."""
        return URL.create(
            drivername=self.DB_DRIVER_NAME,
            username=self.DB_USERNAME,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            database=self.DB_DATABASE_NAME,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings object read from the `.env` file."""
    return Settings()
