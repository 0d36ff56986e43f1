"""
Backend Configuration Module

Centralized settings management using Pydantic.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App Info
    app_name: str = Field(default="ANiLab Chat Assistant", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=10000, alias="PORT")

    # CORS (shop frontend)
    cors_origins: list[str] = Field(
        default=[
            "https://anilab.sk",
            "https://www.anilab.sk",
            "http://localhost:3000",
        ],
        alias="CORS_ORIGINS",
    )

    # Completion API (optional reply polish)
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    llm_timeout: float = Field(default=30.0, alias="LLM_TIMEOUT")
    llm_polish_enabled: bool = Field(default=True, alias="LLM_POLISH_ENABLED")

    # Data files
    catalog_path: str = Field(default=str(DATA_DIR / "products.json"), alias="CATALOG_PATH")
    faq_path: str = Field(default=str(DATA_DIR / "faq.json"), alias="FAQ_PATH")

    # Recommendations
    support_url: str = Field(default="https://anilab.sk/kontakt", alias="SUPPORT_URL")
    recommend_limit: int = Field(default=3, alias="RECOMMEND_LIMIT")

    # Sessions (0 = unbounded)
    session_max: int = Field(default=0, alias="SESSION_MAX")

    # B2B lead mail
    smtp_host: str = Field(default="", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str = Field(default="", alias="SMTP_USER")
    smtp_pass: str = Field(default="", alias="SMTP_PASS")
    smtp_from: str = Field(default="", alias="SMTP_FROM")
    lead_to_email: str = Field(default="", alias="LEAD_TO_EMAIL")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
