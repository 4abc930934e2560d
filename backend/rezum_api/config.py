"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from rezum_api.core.constants import DEFAULT_LLM_MODEL, GEMINI_MODEL


class Settings(BaseSettings):
    openai_api_key: str = ""
    google_api_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_host: str = "https://cloud.langfuse.com"
    llm_model: str = DEFAULT_LLM_MODEL
    gemini_model: str = GEMINI_MODEL
    llm_timeout_seconds: float = 60.0
    allowed_origins: str = "http://localhost:3000,http://localhost:8501"
    log_level: str = "INFO"
    log_format: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_settings: Settings | None = None


def load_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
