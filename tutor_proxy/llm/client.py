from __future__ import annotations

import logging
from typing import Any, Tuple, Type

import httpx
import openai
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tutor_proxy.core.config import Settings
from tutor_proxy.core.constants import AppSettings
from tutor_proxy.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# Worth another attempt; anything else fails on the first try
TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    openai.APIConnectionError,
    openai.RateLimitError,
    httpx.TransportError,
)

UPSTREAM_ERRORS: Tuple[Type[BaseException], ...] = (
    openai.OpenAIError,
    httpx.HTTPError,
    OutputParserException,
    TimeoutError,
)


def build_chat_model(settings: Settings) -> ChatOpenAI:
    """Chat model for the configured OpenAI account with a bounded timeout."""
    return ChatOpenAI(
        **settings.openai_config,
        timeout=httpx.Timeout(settings.UPSTREAM_TIMEOUT),
        # tenacity owns retries
        max_retries=0,
    )


class CompletionClient:
    """
    Single-shot chat completion against the upstream model.

    Features:
    - System + user message chain built once per client
    - Bounded retry on transient network / rate-limit failures
    - Every upstream failure surfaces as UpstreamError
    """

    def __init__(
        self,
        llm: BaseChatModel | Runnable,
        model_name: str | None = None,
        max_attempts: int = AppSettings.UPSTREAM_MAX_ATTEMPTS,
        backoff: float = 1.0,
    ):
        self.llm = llm
        self.model_name = model_name or getattr(llm, "model_name", None)
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.chain = self._build_chain()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            llm=build_chat_model(settings),
            model_name=settings.OPENAI_MODEL.value,
            max_attempts=settings.UPSTREAM_MAX_ATTEMPTS,
        )

    def _build_chain(self) -> Runnable:
        prompt = ChatPromptTemplate.from_messages([
            ("system", "{system}"),
            ("human", "{question}"),
        ])
        return prompt | self.llm | StrOutputParser()

    async def _invoke(self, system_text: str, user_text: str) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=8),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "Retrying completion request (attempt %d/%d)",
                        attempt.retry_state.attempt_number,
                        self.max_attempts,
                    )
                result = await self.chain.ainvoke(
                    {"system": system_text, "question": user_text}
                )
        return result

    async def complete(self, system_text: str, user_text: str) -> str:
        """
        Send one system + user exchange and return the model text.

        Raises:
            UpstreamError: network failure, timeout, error status or empty content
        """
        try:
            result = await self._invoke(system_text, user_text)
        except UPSTREAM_ERRORS as exc:
            raise UpstreamError(
                "Completion request failed",
                model_name=self.model_name,
                original_error=exc,
            ) from exc

        if not isinstance(result, str) or not result.strip():
            raise UpstreamError(
                "Completion returned no usable content",
                model_name=self.model_name,
            )
        return result
