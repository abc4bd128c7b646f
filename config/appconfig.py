# config/appconfig.py
"""
Application Configuration
Record Store location, gateway address for the client package, logging
"""
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Configuration for the Prescription Gateway and its client"""

    APP_NAME: str = "Clinic Prescription Service"

    # ============================================================================
    # RECORD STORE (external json-server style document store)
    # ============================================================================
    RECORD_STORE_URL: str = Field(default="http://localhost:3001")

    # ============================================================================
    # GATEWAY (used by the client package)
    # ============================================================================
    GATEWAY_URL: str = Field(default="http://localhost:8000/api")
    CORS_ORIGINS: List[str] = ["*"]

    # ============================================================================
    # PRESCRIPTION BEHAVIOUR
    # ============================================================================
    # False: every medicine gets a fresh id on update
    # True: unchanged medicines keep their previous id
    PRESERVE_MEDICINE_IDS: bool = False
    RECENT_WINDOW_DAYS: int = 7

    # ============================================================================
    # LOGGING
    # ============================================================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def record_store_base(self) -> str:
        return self.RECORD_STORE_URL.rstrip("/")

    @property
    def LOGGING_CONFIG(self) -> dict:
        """dictConfig payload applied once at startup."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": self.LOG_LEVEL, "propagate": False},
                "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }


settings = AppSettings()
