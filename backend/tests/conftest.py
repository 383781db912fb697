import pytest
from fastapi.testclient import TestClient

from sheetsql.core.config import Settings
from sheetsql.main import app
from sheetsql.models.session import Session
from sheetsql.services.dataset_loader import load_dataset

PRODUCTS = [
    {"Item": "MacBook", "Price": 2000},
    {"Item": "iPhone", "Price": 1000},
    {"Item": "iPad", "Price": 800},
]


@pytest.fixture
def products() -> Session:
    return load_dataset(Session(), PRODUCTS, ["Item", "Price"])


@pytest.fixture
def gemini_settings() -> Settings:
    return Settings(LLM_PROVIDER="gemini", GEMINI_API_KEY="test-key", _env_file=None)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sid(client) -> str:
    return client.post("/sessions").json()["session_id"]


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the model call; set `.answer` (str or exception) per test."""
    class Fake:
        answer = "SELECT * FROM user_data"
        prompts = []

        def __call__(self, prompt, *, settings=None):
            self.prompts.append(prompt)
            if isinstance(self.answer, Exception):
                raise self.answer
            return self.answer

    fake = Fake()
    fake.prompts = []
    monkeypatch.setattr("sheetsql.agents.llm_client.generate_text", fake)
    return fake
