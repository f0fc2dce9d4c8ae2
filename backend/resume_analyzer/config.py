from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import os


class Settings(BaseSettings):
    app_name: str = "Resume Analyzer API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = "INFO"

    # Database - supports both SQLite (local) and PostgreSQL (production)
    database_url: str = "sqlite+aiosqlite:///./resume_analyzer.db"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # AI/LLM Configuration
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_temperature: float = 0.2
    ai_timeout_seconds: float = 60.0

    # Whole-pipeline bound, must exceed ai_timeout_seconds
    analysis_timeout_seconds: float = 120.0

    # Upload limits (enforced by the router, not the pipeline)
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB
    accepted_mime_type: str = "application/pdf"
    upload_dir: str = "uploads"

    # Extracted text beyond this is truncated before prompting
    max_text_chars: int = 50000

    # Field names are case-insensitive for environment variables
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
