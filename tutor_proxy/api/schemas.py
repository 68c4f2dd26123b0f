from pydantic import BaseModel, Field

from tutor_proxy.core.constants import Mode


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1,
                          description="Learner question, already trimmed")
    mode: Mode = Field(..., description="Response style: exam or tldr")


class AskResponse(BaseModel):
    ok: bool = True
    answer: str
    mode: str


class ErrorResponse(BaseModel):
    error: str
    hint: str | None = None


class HealthResponse(BaseModel):
    ok: bool
    openai_key_configured: bool
