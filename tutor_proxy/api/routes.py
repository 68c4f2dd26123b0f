from fastapi import APIRouter, Depends
from typing import Annotated

from .schemas import AskRequest, AskResponse, ErrorResponse
from .dependencies import get_ask_request, get_tutor
from tutor_proxy.tutor.service import TutorService


router = APIRouter(tags=["Tutor"])


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Missing question, unknown mode or question too long"
        },
        500: {
            "model": ErrorResponse,
            "description": "The completion service could not produce an answer"
        },
    },
)
async def ask(
    payload: Annotated[AskRequest, Depends(get_ask_request)],
    tutor: Annotated[TutorService, Depends(get_tutor)],
) -> AskResponse:
    """
    Answer a learner question as plain text in the requested mode.
    """
    answer = await tutor.answer(payload.question, payload.mode)
    return AskResponse(answer=answer, mode=payload.mode.value)
