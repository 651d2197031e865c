import logging
import os
from enum import Enum
from typing import List, Optional

from pydantic_settings import BaseSettings
from starlette.config import Config

logger = logging.getLogger(__name__)

current_file_dir = os.path.dirname(os.path.realpath(__file__))
project_root = os.path.abspath(os.path.join(current_file_dir, "..", "..", ".."))

env_paths = [
    "/code/.env",
    os.path.join(project_root, ".env"),
    "/.env",
]

env_path = next((path for path in env_paths if os.path.isfile(path)), env_paths[0])
logger.info(f"Using environment file at: {env_path}")

config = Config(env_path)


class EnvironmentOption(str, Enum):
    """Environment options for the application."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    LOCAL = "local"


class EmbeddingProviderOption(str, Enum):
    """Where embeddings are computed."""

    OPENAI = "openai"
    LOCAL = "local"


class EnvironmentSettings(BaseSettings):
    """Environment-related settings."""

    ENVIRONMENT: EnvironmentOption = config("ENVIRONMENT", default=EnvironmentOption.DEVELOPMENT, cast=EnvironmentOption)


class DatabaseSettings(BaseSettings):
    """Database-related settings."""

    POSTGRES_USER: str = config("POSTGRES_USER", default="postgres")
    POSTGRES_PASSWORD: str = config("POSTGRES_PASSWORD", default="postgres")
    POSTGRES_SERVER: str = config("POSTGRES_SERVER", default="localhost")
    POSTGRES_PORT: int = config("POSTGRES_PORT", default=5432, cast=int)
    POSTGRES_DB: str = config("POSTGRES_DB", default="postgres")
    POSTGRES_ASYNC_PREFIX: str = config("POSTGRES_ASYNC_PREFIX", default="postgresql+asyncpg://")
    POSTGRES_URL_OVERRIDE: str = config("DATABASE_URL", default="")
    CREATE_TABLES_ON_STARTUP: bool = config("CREATE_TABLES_ON_STARTUP", default=True, cast=bool)

    POSTGRES_POOL_SIZE: int = config("POSTGRES_POOL_SIZE", default=20, cast=int)
    POSTGRES_MAX_OVERFLOW: int = config("POSTGRES_MAX_OVERFLOW", default=0, cast=int)
    POSTGRES_COMMAND_TIMEOUT: float = config("POSTGRES_COMMAND_TIMEOUT", default=30.0, cast=float)

    @property
    def DATABASE_URL(self) -> str:
        """Get the full database URL.

        A ``DATABASE_URL`` in the environment wins over the individual parts. Plain
        ``postgres://`` or ``postgresql://`` URLs are rewritten to the async driver.
        """
        if self.POSTGRES_URL_OVERRIDE:
            url = self.POSTGRES_URL_OVERRIDE
            for prefix in ("postgresql://", "postgres://"):
                if url.startswith(prefix):
                    return self.POSTGRES_ASYNC_PREFIX + url[len(prefix) :]
            return url
        return (
            f"{self.POSTGRES_ASYNC_PREFIX}{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


class OpenAISettings(BaseSettings):
    """OpenAI client settings shared by embeddings and chat."""

    OPENAI_API_KEY: str = config("OPENAI_API_KEY", default="")
    OPENAI_BASE_URL: Optional[str] = config("OPENAI_BASE_URL", default=None)
    OPENAI_TIMEOUT: float = config("OPENAI_TIMEOUT", default=30.0, cast=float)
    # Retries are off: callers decide whether a 429 or 503 is worth another try.
    OPENAI_MAX_RETRIES: int = config("OPENAI_MAX_RETRIES", default=0, cast=int)


class EmbeddingSettings(BaseSettings):
    """Embedding model settings."""

    EMBEDDING_PROVIDER: EmbeddingProviderOption = config(
        "EMBEDDING_PROVIDER", default=EmbeddingProviderOption.OPENAI, cast=EmbeddingProviderOption
    )
    EMBEDDING_MODEL: str = config("EMBEDDING_MODEL", default="text-embedding-3-small")
    LOCAL_EMBEDDING_MODEL: str = config("LOCAL_EMBEDDING_MODEL", default="all-mpnet-base-v2")
    EMBEDDING_DIMENSION: int = config("EMBEDDING_DIMENSION", default=1536, cast=int)


class IngestionSettings(BaseSettings):
    """Batch ingestion settings."""

    INGEST_INPUT_PATH: str = config("INGEST_INPUT_PATH", default="./input/data.txt")
    INGEST_BATCH_SIZE: int = config("INGEST_BATCH_SIZE", default=50, cast=int)
    INGEST_MAX_CHUNK_LENGTH: int = config("INGEST_MAX_CHUNK_LENGTH", default=512, cast=int)
    INGEST_CHUNK_OVERLAP: int = config("INGEST_CHUNK_OVERLAP", default=50, cast=int)
    INGEST_BATCH_PAUSE_SECONDS: float = config("INGEST_BATCH_PAUSE_SECONDS", default=0.1, cast=float)


class RetrievalSettings(BaseSettings):
    """Similarity search settings."""

    RETRIEVAL_TOP_K: int = config("RETRIEVAL_TOP_K", default=5, cast=int)
    HNSW_M: int = config("HNSW_M", default=16, cast=int)
    HNSW_EF_CONSTRUCTION: int = config("HNSW_EF_CONSTRUCTION", default=64, cast=int)


class ChatSettings(BaseSettings):
    """Conversation settings."""

    CHAT_MODEL: str = config("CHAT_MODEL", default="gpt-4.1")
    CHAT_MAX_STEPS: int = config("CHAT_MAX_STEPS", default=5, cast=int)


class CORSSettings(BaseSettings):
    """CORS-related settings."""

    CORS_ENABLED: bool = config("CORS_ENABLED", default=True, cast=bool)
    CORS_ORIGINS: str = config("CORS_ORIGINS", default="*")
    CORS_ALLOW_CREDENTIALS: bool = config("CORS_ALLOW_CREDENTIALS", default=True, cast=bool)

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        """Get CORS origins as a list."""
        if not self.CORS_ORIGINS:
            return ["*"]
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]

    CORS_ALLOW_METHODS: str = config("CORS_ALLOW_METHODS", default="*")
    CORS_ALLOW_HEADERS: str = config("CORS_ALLOW_HEADERS", default="*")


class CompressionSettings(BaseSettings):
    """Compression-related settings."""

    GZIP_ENABLED: bool = config("GZIP_ENABLED", default=True, cast=bool)
    GZIP_MINIMUM_SIZE: int = config("GZIP_MINIMUM_SIZE", default=1000, cast=int)


class APIDocSettings(BaseSettings):
    """API documentation settings."""

    ENABLE_DOCS_IN_PRODUCTION: bool = config("ENABLE_DOCS_IN_PRODUCTION", default=False, cast=bool)
    DOCS_URL: str = config("DOCS_URL", default="/docs")
    REDOC_URL: str = config("REDOC_URL", default="/redoc")
    OPENAPI_URL: str = config("OPENAPI_URL", default="/openapi.json")


class APISettings(BaseSettings):
    """API-related settings."""

    API_PREFIX: str = "/api"


class AppSettings(BaseSettings):
    """Application-related settings."""

    APP_NAME: str = "RAG Support Chat API"
    APP_DESCRIPTION: str = "Retrieval-augmented support chatbot over a pgvector knowledge base"
    DEBUG: bool = config("DEBUG", default=False, cast=bool)
    VERSION: str = "0.1.0"


class LoggingSettings(BaseSettings):
    """Centralized logging configuration settings."""

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="detailed")  # "simple", "detailed", "structured", "json"

    LOG_CONSOLE_ENABLED: bool = config("LOG_CONSOLE_ENABLED", default=True, cast=bool)
    LOG_FILE_ENABLED: bool = config("LOG_FILE_ENABLED", default=False, cast=bool)
    LOG_FILE_PATH: str = config("LOG_FILE_PATH", default="logs/ragchat.log")
    LOG_FILE_MAX_SIZE: int = config("LOG_FILE_MAX_SIZE", default=10485760, cast=int)
    LOG_FILE_BACKUP_COUNT: int = config("LOG_FILE_BACKUP_COUNT", default=5, cast=int)

    LOG_SQL_QUERIES: bool = config("LOG_SQL_QUERIES", default=False, cast=bool)
    LOG_DEVELOPMENT_VERBOSE: bool = config("LOG_DEVELOPMENT_VERBOSE", default=False, cast=bool)
    LOG_PRODUCTION_OPTIMIZE: bool = config("LOG_PRODUCTION_OPTIMIZE", default=True, cast=bool)

    @property
    def LOG_LEVEL_INT(self) -> int:
        """Convert string log level to integer."""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(self.LOG_LEVEL.upper(), logging.INFO)


class Settings(
    EnvironmentSettings,
    DatabaseSettings,
    OpenAISettings,
    EmbeddingSettings,
    IngestionSettings,
    RetrievalSettings,
    ChatSettings,
    CORSSettings,
    CompressionSettings,
    APIDocSettings,
    APISettings,
    AppSettings,
    LoggingSettings,
):
    """Main settings class that combines all setting categories."""

    pass


settings = Settings()


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        The application settings.
    """
    return settings
