"""Configuration management for the ProfRAG service."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"

if env_path.exists():
    load_dotenv(env_path)


class Config:
    """Application configuration loaded from environment variables."""

    # Credentials
    @classmethod
    def get_openai_api_key(cls) -> str:
        """Get OpenAI API key from environment variables.

        Returns:
            OpenAI API key from environment or empty string if not set.
        """
        return os.getenv("OPENAI_API_KEY", "")

    @classmethod
    def get_pinecone_api_key(cls) -> str:
        """Get Pinecone API key from environment variables.

        Returns:
            Pinecone API key from environment or empty string if not set.
        """
        return os.getenv("PINECONE_API_KEY", "")

    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL")

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    OPENAI_LOG_LEVEL: str = os.getenv("OPENAI_LOG_LEVEL", "WARNING").upper()
    PINECONE_LOG_LEVEL: str = os.getenv("PINECONE_LOG_LEVEL", "WARNING").upper()

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Model Configuration
    EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002")
    CHAT_MODEL: str = os.getenv("CHAT_MODEL", "gpt-4")

    # Vector Index Configuration
    PINECONE_INDEX_NAME: str = os.getenv("PINECONE_INDEX_NAME", "rag")
    PINECONE_INDEX_HOST: str | None = os.getenv("PINECONE_INDEX_HOST")
    PINECONE_NAMESPACE: str = os.getenv("PINECONE_NAMESPACE", "ns1")
    RETRIEVAL_TOP_K: int = int(os.getenv("RETRIEVAL_TOP_K", "3"))

    # API Header Configuration
    API_USER_AGENT: str = os.getenv("API_USER_AGENT", "ProfRAG/1.0")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values.

        Raises:
            ValueError: If OPENAI_API_KEY or PINECONE_API_KEY is not set.
        """
        missing = []
        if not cls.get_openai_api_key():
            missing.append("OPENAI_API_KEY")
        if not cls.get_pinecone_api_key():
            missing.append("PINECONE_API_KEY")
        if missing:
            msg = (
                f"{', '.join(missing)} required. "
                "Please set it in .env file or environment."
            )
            raise ValueError(msg)

    @classmethod
    def setup_logging(cls) -> None:
        """Setup basic logging configuration.

        Configure logging once at application startup with:
        - Console output for all levels
        - Simple, readable format
        - Configurable level via environment variable
        """
        logging.basicConfig(
            level=getattr(logging, cls.LOG_LEVEL, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )

        openai_level = getattr(logging, cls.OPENAI_LOG_LEVEL, logging.WARNING)
        logging.getLogger("openai").setLevel(openai_level)
        logging.getLogger("httpx").setLevel(openai_level)
        logging.getLogger("pinecone").setLevel(
            getattr(logging, cls.PINECONE_LOG_LEVEL, logging.WARNING)
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger with the specified name.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        return logging.getLogger(name)

    @classmethod
    def get_api_headers(cls) -> dict[str, str]:
        """Build default headers for outbound OpenAI calls.

        Returns:
            Mapping of header names to values used on outbound HTTP requests.
        """
        headers: dict[str, str] = {}

        if cls.API_USER_AGENT:
            headers["User-Agent"] = cls.API_USER_AGENT

        return headers


config = Config()
