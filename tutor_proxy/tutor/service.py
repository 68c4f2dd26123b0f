import logging
from typing import Mapping

from tutor_proxy.core.constants import Mode
from tutor_proxy.core.formatting import normalize
from tutor_proxy.core.prompts import MODE_PROMPTS, USER_REMINDER, select_prompt
from tutor_proxy.llm.client import CompletionClient

logger = logging.getLogger(__name__)


class TutorService:
    """Answers a learner question in the requested mode.

    Picks the system instructions for the mode, makes exactly one
    completion call and returns the cleaned plain-text answer.
    """

    def __init__(
        self,
        client: CompletionClient,
        templates: Mapping[Mode, str] = MODE_PROMPTS,
        user_reminder: str = USER_REMINDER,
    ):
        self.client = client
        self.templates = templates
        self.user_reminder = user_reminder

    async def answer(self, question: str, mode: Mode) -> str:
        system_text = select_prompt(mode, self.templates)
        logger.info("Answering question | mode=%s | chars=%d",
                    Mode(mode).value, len(question))
        raw = await self.client.complete(system_text, question + self.user_reminder)
        return normalize(raw)
