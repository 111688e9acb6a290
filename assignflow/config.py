"""Application configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    log_level: str = "INFO"

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.strip().upper()

    default_warehouse: str = "SYSTEM"
    default_assignment_suggestion: str = (
        "Please review the query execution plan and optimize partition filtering."
    )
    update_review_suggestion: str = "Please review the latest update in Assigned Tasks."
    require_optimized_before_resolve: bool = False
    cors_allow_origins: list[str] = ["*"]


settings = Settings()
