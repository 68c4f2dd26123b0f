import pytest
from fastapi.testclient import TestClient

from tutor_proxy.api.dependencies import get_settings_dependency, get_tutor
from tutor_proxy.core.config import Settings
from tutor_proxy.llm.client import CompletionClient
from tutor_proxy.main import app
from tutor_proxy.tutor.service import TutorService


@pytest.fixture
def settings():
    return Settings(OPENAI_API_KEY="sk-test")


@pytest.fixture
def mock_completion(mocker):
    """Stand-in for the upstream completion call"""
    mock_client = mocker.AsyncMock(spec=CompletionClient)
    mock_client.complete.return_value = "Plain answer"
    return mock_client


@pytest.fixture
def client(settings, mock_completion):
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    app.dependency_overrides[get_tutor] = lambda: TutorService(client=mock_completion)
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
