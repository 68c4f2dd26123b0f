import httpx
import openai
import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda
from langchain_openai import ChatOpenAI

from tutor_proxy.core.config import Settings
from tutor_proxy.core.exceptions import UpstreamError
from tutor_proxy.llm.client import CompletionClient, build_chat_model

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))


def auth_error():
    request = httpx.Request("POST", OPENAI_URL)
    response = httpx.Response(401, request=request)
    return openai.AuthenticationError("Incorrect API key provided", response=response, body=None)


@pytest.mark.asyncio
async def test_complete_returns_model_text():
    client = CompletionClient(FakeListChatModel(responses=["**Assets** = L + E"]))

    result = await client.complete("system text", "What is equity?")

    assert result == "**Assets** = L + E"


@pytest.mark.asyncio
async def test_complete_sends_system_and_user_messages():
    seen = []

    def fake_llm(prompt_value):
        seen.extend(prompt_value.to_messages())
        return AIMessage(content="ok")

    client = CompletionClient(RunnableLambda(fake_llm))
    await client.complete("Be a tutor.", "Explain VAT {with braces}")

    assert [m.type for m in seen] == ["system", "human"]
    assert seen[0].content == "Be a tutor."
    assert seen[1].content == "Explain VAT {with braces}"


@pytest.mark.asyncio
async def test_connection_error_is_wrapped():
    def failing(_):
        raise connection_error()

    client = CompletionClient(RunnableLambda(failing), model_name="gpt-4o", max_attempts=1)

    with pytest.raises(UpstreamError) as exc:
        await client.complete("system", "question")

    assert isinstance(exc.value.original_error, openai.APIConnectionError)
    assert exc.value.model_name == "gpt-4o"


@pytest.mark.asyncio
async def test_transient_error_is_retried():
    calls = {"count": 0}

    def flaky(_):
        calls["count"] += 1
        if calls["count"] == 1:
            raise connection_error()
        return AIMessage(content="recovered")

    client = CompletionClient(RunnableLambda(flaky), max_attempts=2, backoff=0)

    assert await client.complete("system", "question") == "recovered"
    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_retries_are_bounded():
    calls = {"count": 0}

    def always_down(_):
        calls["count"] += 1
        raise connection_error()

    client = CompletionClient(RunnableLambda(always_down), max_attempts=3, backoff=0)

    with pytest.raises(UpstreamError):
        await client.complete("system", "question")
    assert calls["count"] == 3


@pytest.mark.asyncio
async def test_status_error_is_not_retried():
    calls = {"count": 0}

    def unauthorized(_):
        calls["count"] += 1
        raise auth_error()

    client = CompletionClient(RunnableLambda(unauthorized), max_attempts=3, backoff=0)

    with pytest.raises(UpstreamError):
        await client.complete("system", "question")
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_timeout_is_upstream_error():
    def slow(_):
        raise openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL))

    client = CompletionClient(RunnableLambda(slow), max_attempts=1)

    with pytest.raises(UpstreamError):
        await client.complete("system", "question")


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   \n"])
async def test_blank_content_is_upstream_error(content):
    client = CompletionClient(RunnableLambda(lambda _: AIMessage(content=content)))

    with pytest.raises(UpstreamError) as exc:
        await client.complete("system", "question")

    assert "no usable content" in exc.value.message


def test_build_chat_model_uses_settings():
    settings = Settings(OPENAI_API_KEY="sk-test", UPSTREAM_TIMEOUT=12.5)

    llm = build_chat_model(settings)

    assert isinstance(llm, ChatOpenAI)
    assert llm.model_name == "gpt-4o"
    assert llm.temperature == 0.3
    assert llm.max_retries == 0


def test_from_settings():
    settings = Settings(OPENAI_API_KEY="sk-test", UPSTREAM_MAX_ATTEMPTS=3)

    client = CompletionClient.from_settings(settings)

    assert client.model_name == "gpt-4o"
    assert client.max_attempts == 3
