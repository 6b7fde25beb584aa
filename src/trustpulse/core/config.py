"""Configuration management for TrustPulse."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # OpenAI API
    openai_api_key: str = Field("", description="OpenAI API key")
    OPENAI_API_KEY: str = Field("", description="OpenAI API key (alternative naming)")
    openai_model: str = Field("gpt-4o-mini", description="Model for text and structured output")
    search_model: str = Field("gpt-4o-mini-search-preview", description="Model used for grounded requests")
    image_model: str = Field("gpt-image-1", description="Model for image generation and editing")
    enable_web_search: bool = Field(True, description="Honour the grounding flag on requests")

    @property
    def effective_openai_key(self) -> str:
        """Get the effective OpenAI API key from either field."""
        return self.openai_api_key or self.OPENAI_API_KEY

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Request behaviour
    request_timeout: float = Field(60.0, description="Timeout for model requests in seconds")
    max_attempts: int = Field(1, description="Attempts per model request (1 disables retry)")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")

    # Response cache
    cache_enabled: bool = Field(False, description="Cache model replies on disk")
    cache_dir: str = Field("cache/llm_cache", description="Directory for the reply cache")
    cache_ttl_hours: int = Field(24, description="Reply cache time-to-live in hours")

    # Directory seed data
    seed_businesses_path: str = Field("", description="YAML file with seeded directory listings")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
