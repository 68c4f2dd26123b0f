from enum import Enum


class OpenAIModels(Enum):
    """Supported OpenAI chat model identifiers"""

    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_1 = "gpt-4.1"
    GPT_4_1_MINI = "gpt-4.1-mini"


class Mode(str, Enum):
    """Response style requested by the learner."""
    EXAM = "exam"
    TLDR = "tldr"


class AppSettings:
    """Central place for all application-level configuration"""

    ENVIRONMENT: str = "development"
    OPENAI_MODEL: OpenAIModels = OpenAIModels.GPT_4O
    TEMPERATURE: float = 0.3
    MAX_TOKENS: int = 1000
    UPSTREAM_TIMEOUT: float = 30.0
    UPSTREAM_MAX_ATTEMPTS: int = 2
    MAX_QUESTION_LENGTH: int = 4000
    ALLOWED_ORIGINS = [
        "http://localhost:5173",
        "https://empowermint-pwa.vercel.app",
    ]
    HOST: str = "0.0.0.0"
    PORT: int = 3000
