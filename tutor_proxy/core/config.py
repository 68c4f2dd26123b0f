from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AppSettings, OpenAIModels


class Settings(BaseSettings):
    """Application settings loaded from environment + defaults"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: str = AppSettings.ENVIRONMENT
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: OpenAIModels = AppSettings.OPENAI_MODEL
    TEMPERATURE: float = Field(default=AppSettings.TEMPERATURE, ge=0.0, le=2.0)
    MAX_TOKENS: int = Field(default=AppSettings.MAX_TOKENS, ge=1)
    UPSTREAM_TIMEOUT: float = Field(default=AppSettings.UPSTREAM_TIMEOUT, gt=0)
    UPSTREAM_MAX_ATTEMPTS: int = Field(
        default=AppSettings.UPSTREAM_MAX_ATTEMPTS, ge=1, le=5)
    MAX_QUESTION_LENGTH: int = Field(
        default=AppSettings.MAX_QUESTION_LENGTH, ge=1)
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=lambda: list(AppSettings.ALLOWED_ORIGINS))
    HOST: str = AppSettings.HOST
    PORT: int = AppSettings.PORT

    @property
    def has_api_key(self) -> bool:
        return bool(self.OPENAI_API_KEY.strip())

    @property
    def openai_config(self) -> dict:
        return {
            "model": self.OPENAI_MODEL.value,
            "api_key": self.OPENAI_API_KEY,
            "temperature": self.TEMPERATURE,
            "max_tokens": self.MAX_TOKENS,
        }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
