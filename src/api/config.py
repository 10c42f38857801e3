"""
API configuration settings.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """API settings."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    ENABLE_DEBUG_LOGS: bool = False  # AI decision diagnostics per session
    DIAGNOSTIC_HISTORY: int = 200

    # Match
    MATCH_CONFIG_FILE: Optional[str] = None  # Bundled default when unset
    MAX_FRAME_MS: int = 100

    # Simulation
    DEFAULT_SIMULATION_COUNT: int = 100
    MAX_SIMULATION_COUNT: int = 1000

    # Session
    MAX_SESSIONS: int = 100

    class Config:
        env_file = ".env"


settings = Settings()
