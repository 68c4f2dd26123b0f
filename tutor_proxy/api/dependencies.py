import json

from fastapi import Depends, Request

from tutor_proxy.core.config import get_settings, Settings
from tutor_proxy.core.exceptions import UpstreamError
from tutor_proxy.llm.client import CompletionClient
from tutor_proxy.tutor.service import TutorService

from .schemas import AskRequest
from .validation import validate_ask_payload


def get_settings_dependency() -> Settings:
    return get_settings()


async def get_ask_request(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> AskRequest:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    return validate_ask_payload(body, max_length=settings.MAX_QUESTION_LENGTH)


def get_completion_client(
    settings: Settings = Depends(get_settings_dependency),
) -> CompletionClient:
    if not settings.has_api_key:
        raise UpstreamError("OPENAI_API_KEY is not configured")
    return CompletionClient.from_settings(settings)


def get_tutor(
    client: CompletionClient = Depends(get_completion_client),
) -> TutorService:
    return TutorService(client=client)
