"""Configuration settings for the application."""
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


DEFAULT_ICON_URL = (
    "https://storage.yandexcloud.net/mephistorine-pocketbase-test/"
    "TwemojiPartyPopper%201%20(1).png"
)


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Holidays Time Webhook"
    host: str = "localhost"
    port: int = 3000
    environment: str = "development"

    # Cache store
    redis_url: str = "redis://localhost:6379/0"

    # Shared secret expected in "Authorization: Token <secret>" in production
    time_token: str = ""

    # Upstream page, {month} is the transliterated month slug, {day} the day of month
    source_url_template: str = "https://kakoysegodnyaprazdnik.ru/baza/{month}/{day}"
    fetch_timeout: Optional[float] = None

    # Empty string disables the icon field in replies
    icon_url: str = DEFAULT_ICON_URL

    # Daily cache refresh; UTC midnight is when the cache key rolls over
    refresh_hour: int = 0
    refresh_minute: int = 0
    refresh_timezone: str = "UTC"

    log_level: str = "INFO"
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


settings = get_settings()
