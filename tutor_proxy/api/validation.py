from typing import Any

from tutor_proxy.core.constants import AppSettings, Mode
from tutor_proxy.core.exceptions import (
    InvalidModeError,
    MissingFieldError,
    QuestionTooLongError,
)

from .schemas import AskRequest

RECOGNIZED_MODES = {mode.value: mode for mode in Mode}


def validate_ask_payload(
    body: Any,
    max_length: int = AppSettings.MAX_QUESTION_LENGTH,
) -> AskRequest:
    """
    Check a decoded /ask body and return the trimmed question with its mode.

    Raises:
        MissingFieldError: question absent, not a string, or blank
        InvalidModeError: mode absent or not 'exam' / 'tldr'
        QuestionTooLongError: trimmed question longer than max_length
    """
    if not isinstance(body, dict):
        body = {}

    question = body.get("question")
    if not isinstance(question, str) or not question.strip():
        raise MissingFieldError()

    mode = body.get("mode")
    if not isinstance(mode, str) or mode not in RECOGNIZED_MODES:
        raise InvalidModeError(mode)

    question = question.strip()
    if len(question) > max_length:
        raise QuestionTooLongError(len(question), max_length)

    return AskRequest(question=question, mode=RECOGNIZED_MODES[mode])
