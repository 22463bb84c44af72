# filtervalues/core/config.py
import logging
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application Configuration Settings. Loads variables from environment variables
    and potentially a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --- Filter Computation ---
    DEFAULT_FILTER_METHOD: str = Field(
        "random_forest_importance", validation_alias="DEFAULT_FILTER_METHOD"
    )
    DEFAULT_REPORT_N_SHOW: int = Field(20, validation_alias="DEFAULT_REPORT_N_SHOW")
    # Seed for the stochastic built-in filters (random forest, mutual information)
    RANDOM_STATE: int = Field(42, validation_alias="RANDOM_STATE")

    # --- Celery Configuration ---
    CELERY_BROKER_URL: str = Field("memory://", validation_alias="CELERY_BROKER_URL")
    CELERY_RESULT_BACKEND: Optional[str] = Field(
        None, validation_alias="CELERY_RESULT_BACKEND"
    )
    # Queue shared by the API producer and the worker consumer
    FILTER_VALUES_QUEUE: str = Field("filter_values", validation_alias="FILTER_VALUES_QUEUE")

    # --- API ---
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias="CORS_ORIGINS",
    )

    # --- Other Settings ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")


# Create a single, reusable settings instance
settings = Settings()

# --- Basic Logging Setup ---
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)
logger.info("Application settings loaded.")
logger.info(f"Log Level: {settings.LOG_LEVEL}")
logger.info(f"Default filter method: {settings.DEFAULT_FILTER_METHOD}")
logger.info(f"Broker URL: {settings.CELERY_BROKER_URL}")
logger.info(
    f"Result Backend: {'Configured' if settings.CELERY_RESULT_BACKEND else 'Not Configured'}"
)
