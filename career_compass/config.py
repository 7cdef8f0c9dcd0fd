"""Application configuration with comprehensive validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Career Compass Analysis Service"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Snowflake
    SNOWFLAKE_ACCOUNT: str
    SNOWFLAKE_USER: str
    SNOWFLAKE_PASSWORD: SecretStr
    SNOWFLAKE_DATABASE: str
    SNOWFLAKE_SCHEMA: str
    SNOWFLAKE_WAREHOUSE: str
    SNOWFLAKE_ROLE: str

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_ANALYSIS: int = Field(default=3600, ge=1)   # completed results never change
    CACHE_TTL_CATALOG: int = Field(default=86400, ge=1)   # 24 hours

    # LLM provider (OpenAI-compatible)
    OPENAI_API_KEY: Optional[SecretStr] = None
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    AI_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    AI_MAX_TOKENS: int = Field(default=4000, ge=256, le=32000)

    # Timeouts (seconds)
    AI_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0, le=600)
    AI_PROBE_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0, le=60)
    HEALTH_CHECK_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0, le=120)

    # Knowledge base
    KNOWLEDGE_SEARCH_LIMIT: int = Field(default=10, ge=1, le=100)

    # Analysis outbox worker
    ANALYSIS_WORKER_ENABLED: bool = True
    WORKER_POLL_INTERVAL_SECONDS: float = Field(default=15.0, ge=0.1, le=3600)
    WORKER_BATCH_SIZE: int = Field(default=10, ge=1, le=500)
    WORKER_STALE_CLAIM_SECONDS: int = Field(default=600, ge=30)

    @field_validator("OPENAI_API_KEY")
    @classmethod
    def validate_openai_key(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        if v is not None and not v.get_secret_value().startswith("sk-"):
            raise ValueError("Invalid OpenAI API key format")
        return v

    @model_validator(mode="after")
    def validate_timeouts(self):
        """The AI probe must resolve inside the overall health bound."""
        if self.AI_PROBE_TIMEOUT_SECONDS >= self.HEALTH_CHECK_TIMEOUT_SECONDS:
            raise ValueError(
                "AI_PROBE_TIMEOUT_SECONDS must be lower than HEALTH_CHECK_TIMEOUT_SECONDS"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has safe settings."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def ai_configured(self) -> bool:
        return self.OPENAI_API_KEY is not None


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
