"""
Application Configuration
"""

from typing import List, Optional

from pydantic_settings import BaseSettings

from ..solvers.registry import DEFAULT_PLUGIN_ORDER


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    # Deterministic engine
    MODULUS: int = 100000
    PLUGIN_ORDER: List[str] = DEFAULT_PLUGIN_ORDER

    # Fallback reasoning service (Ollama-compatible chat API)
    FALLBACK_ENABLED: bool = True
    OLLAMA_HOST: str = "http://localhost:11434"
    FALLBACK_MODEL: str = "llama3.2"
    FALLBACK_TIMEOUT: float = 120.0

    # Reference benchmark catalogue (packaged YAML when unset)
    REFERENCE_PROBLEMS_PATH: Optional[str] = None

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
